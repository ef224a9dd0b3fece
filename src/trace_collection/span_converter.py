"""
Span Converter

Flattens Jaeger traces into the span format consumed by the service insights
graph builder:

    spanId, parentSpanId, traceId, serviceName, operationName,
    startTime, duration (microseconds), tags (list of {key, value})

Jaeger keeps the service name in the trace's ``processes`` section and the
parent in a CHILD_OF reference; both are resolved here.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

logger = logging.getLogger("span-converter")


def extract_service_name(span: Dict, processes: Dict) -> str:
    """Service name of a Jaeger span, taken from the trace's processes section."""
    process = span.get('process')
    if process is None:
        process = processes.get(span.get('processID', ''), {})
    return process.get('serviceName', 'unknown')


def extract_parent_span_id(span: Dict) -> Optional[str]:
    """Span id of the CHILD_OF reference, if any."""
    for ref in span.get('references', []):
        if ref.get('refType') == 'CHILD_OF':
            return ref.get('spanID')
    return None


def convert_span(span: Dict, processes: Dict, trace_id: Optional[str] = None) -> Dict:
    return {
        'spanId': span.get('spanID'),
        'parentSpanId': extract_parent_span_id(span),
        'traceId': span.get('traceID', trace_id),
        'serviceName': extract_service_name(span, processes),
        'operationName': span.get('operationName', 'unknown'),
        'startTime': span.get('startTime', 0),
        'duration': span.get('duration', 0),
        'tags': [{'key': tag.get('key'), 'value': tag.get('value')} for tag in span.get('tags', [])]
    }


def convert_trace(trace: Dict) -> List[Dict]:
    """Convert every span of one Jaeger trace."""
    processes = trace.get('processes', {})
    trace_id = trace.get('traceID')
    return [convert_span(span, processes, trace_id) for span in trace.get('spans', [])]


def convert_traces(traces: List[Dict]) -> List[Dict]:
    """Convert a list of Jaeger traces into one flat span list."""
    spans = []
    for trace in traces:
        spans.extend(convert_trace(trace))
    logger.info(f"Converted {len(traces)} traces into {len(spans)} spans")
    return spans


def _is_jaeger_trace(item: Dict) -> bool:
    spans = item.get('spans')
    if not isinstance(spans, list):
        return False
    return 'processes' in item or any('spanID' in span for span in spans)


def load_spans(data: Union[Dict, List]) -> Tuple[List[Dict], int]:
    """
    Load spans from a parsed JSON document.

    Accepts Jaeger API responses (``{"data": [traces]}``), lists of Jaeger
    traces, single Jaeger traces, ``{"spans": [...]}`` documents and plain
    lists of flat spans.

    Returns:
        Tuple of (flat spans, number of distinct traces)
    """
    if isinstance(data, dict):
        if 'data' in data:
            data = data['data']
        elif _is_jaeger_trace(data):
            data = [data]
        elif 'spans' in data:
            data = data['spans']
        else:
            raise ValueError("Unrecognized span document: expected 'data' or 'spans'")

    if not isinstance(data, list):
        raise ValueError(f"Unrecognized span document of type {type(data).__name__}")

    if data and all(isinstance(item, dict) and _is_jaeger_trace(item) for item in data):
        spans = convert_traces(data)
    else:
        spans = data

    trace_count = len({span.get('traceId') for span in spans})
    return spans, trace_count
