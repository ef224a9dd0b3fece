"""
Pytest fixtures for service insights testing.

Provides shared fixtures for:
- Building flat spans the way the span retrieval layer delivers them
- The default span type matcher chain and classifier
- Jaeger-format traces for the conversion and retrieval layers
"""

import pytest

from service_insights import SpanClassifier, build_default_span_types
from trace_collection import Config


def build_span(span_id, service_name, operation_name='operation', parent_span_id=None,
               trace_id='trace-1', duration=1000, tags=None):
    return {
        'spanId': span_id,
        'parentSpanId': parent_span_id,
        'serviceName': service_name,
        'operationName': operation_name,
        'traceId': trace_id,
        'duration': duration,
        'tags': tags or [],
    }


# ============================================================================
# Span Fixtures
# ============================================================================

@pytest.fixture
def make_span():
    """Factory for flat spans."""
    return build_span


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def span_types(config):
    return build_default_span_types(config)


@pytest.fixture
def classifier(span_types):
    return SpanClassifier(span_types)


# ============================================================================
# Jaeger Fixtures
# ============================================================================

@pytest.fixture
def jaeger_trace():
    """A two-span Jaeger trace: frontend calls backend."""
    return {
        'traceID': 'abc123',
        'spans': [
            {
                'traceID': 'abc123',
                'spanID': 's1',
                'operationName': 'GET /checkout',
                'references': [],
                'startTime': 1700000000000000,
                'duration': 5000,
                'tags': [{'key': 'span.kind', 'type': 'string', 'value': 'server'}],
                'processID': 'p1',
            },
            {
                'traceID': 'abc123',
                'spanID': 's2',
                'operationName': 'reserve',
                'references': [{'refType': 'CHILD_OF', 'traceID': 'abc123', 'spanID': 's1'}],
                'startTime': 1700000000001000,
                'duration': 2000,
                'tags': [],
                'processID': 'p2',
            },
        ],
        'processes': {
            'p1': {'serviceName': 'frontend', 'tags': []},
            'p2': {'serviceName': 'inventory', 'tags': []},
        },
    }
