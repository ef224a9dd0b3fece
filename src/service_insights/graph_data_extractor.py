"""
Graph Data Extractor for Service Insights

Builds the dependency graph around one central service from a list of fully
hydrated spans. The extraction is a pure transform: every call builds fresh
nodes and links from its input and keeps nothing afterwards, so independent
requests can share an extractor without coordination.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .cycles import CycleDetector
from .links import LinkAggregator
from .models import Link, Node
from .nodes import NodeAggregator
from .relationships import RelationshipClassifier
from .span_types import SpanClassifier, SpanTypeMatcher, build_default_span_types
from .traversal import TraversalContext
from .uninstrumented import UninstrumentedSynthesizer

logger = logging.getLogger("graph-data-extractor")


def summarize(cycles_found: int, uninstrumented_count: int, traces_considered: int,
              trace_limit_reached: bool) -> Dict:
    """Build the violation summary returned alongside the graph."""
    violations = {}

    if cycles_found > 0:
        violations['cycles'] = cycles_found

    if uninstrumented_count > 0:
        violations['uninstrumented'] = uninstrumented_count

    return {
        'violations': violations,
        'hasViolations': len(violations) > 0,
        'tracesConsidered': traces_considered,
        'traceLimitReached': trace_limit_reached
    }


class GraphDataExtractor:
    """Turns spans into service insights nodes, links and a violation summary."""

    def __init__(self, span_types: Optional[List[SpanTypeMatcher]] = None):
        if span_types is None:
            span_types = build_default_span_types()
        self.classifier = SpanClassifier(span_types)
        self.node_aggregator = NodeAggregator(self.classifier)
        self.link_aggregator = LinkAggregator(self.classifier)
        self.cycle_detector = CycleDetector()

    def process_nodes_and_links(self, nodes: Dict[str, Node], links: Dict[Tuple[str, str], Link]) -> Dict:
        """Validate and classify the graph in place; return the partial summary."""
        cycles_found = self.cycle_detector.detect(nodes, links)

        context = TraversalContext(nodes, links)
        RelationshipClassifier(context).classify(nodes)

        unique_traces = set()
        for node in nodes.values():
            unique_traces.update(trace_id for trace_id in node.trace_ids if trace_id is not None)

        # Synthesized nodes only repeat trace ids of the node they follow
        uninstrumented_count = UninstrumentedSynthesizer(context).synthesize(nodes, links)

        return {
            'cycles_found': cycles_found,
            'uninstrumented_count': uninstrumented_count,
            'traces_considered': len(unique_traces)
        }

    def extract(self, spans: List[Dict], service_name: str, trace_limit_reached: bool = False) -> Dict:
        """
        Build the service insights graph for ``service_name``.

        Args:
            spans: Fully hydrated spans related to multiple traces
            service_name: Service the graph is centred on
            trace_limit_reached: Whether the span source truncated its results

        Returns:
            Dictionary with ``summary``, ``nodes`` and ``links``
        """
        spans = list(spans)
        logger.info(f"Extracting service insights for {service_name} from {len(spans)} spans")

        nodes = self.node_aggregator.build(spans, service_name)
        links = self.link_aggregator.build(spans)
        processed = self.process_nodes_and_links(nodes, links)

        summary = summarize(
            processed['cycles_found'],
            processed['uninstrumented_count'],
            processed['traces_considered'],
            trace_limit_reached
        )

        if summary['hasViolations']:
            logger.warning(f"Service insights for {service_name} has violations: {summary['violations']}")

        return {
            'summary': summary,
            'nodes': [node.to_dict() for node in nodes.values()],
            'links': [link.to_dict() for link in links.values()]
        }


def extract_nodes_and_links(spans: List[Dict], service_name: str, trace_limit_reached: bool = False,
                            span_types: Optional[List[SpanTypeMatcher]] = None) -> Dict:
    """
    Build nodes and links for ``service_name`` from spans of multiple traces.

    Args:
        spans: Fully hydrated span dictionaries
        service_name: Service to centre the graph on
        trace_limit_reached: Passed through to the summary
        span_types: Matcher chain; defaults to the configured matchers

    Returns:
        Dictionary with ``summary``, ``nodes`` and ``links``
    """
    extractor = GraphDataExtractor(span_types)
    return extractor.extract(spans, service_name, trace_limit_reached)
