"""
Link Aggregation

Derives directed edges between nodes from parent-child span relationships.
"""

import logging
from typing import Dict, List, Tuple

from .models import Link, create_link
from .span_types import SpanClassifier

logger = logging.getLogger("link-aggregator")


class LinkAggregator:
    """Builds the link map for one extraction run."""

    def __init__(self, classifier: SpanClassifier):
        self.classifier = classifier

    def build(self, spans: List[Dict]) -> Dict[Tuple[str, str], Link]:
        """Map ``(source, target)`` to link, at most one link per ordered pair."""
        links = {}
        spans_by_id = {span.get('spanId'): span for span in spans}
        unresolved = 0

        for span in spans:
            parent_span_id = span.get('parentSpanId')
            if parent_span_id is None:
                continue

            parent_span = spans_by_id.get(parent_span_id)
            if parent_span is None:
                unresolved += 1
                continue

            parent_node_id = self.classifier.node_id(parent_span)
            child_node_id = self.classifier.node_id(span)
            if parent_node_id == child_node_id:
                # Client and server sides of the same node
                continue

            key = (parent_node_id, child_node_id)
            current_link = links.get(key)
            if current_link is None:
                links[key] = create_link(source=parent_node_id, target=child_node_id)
                logger.debug(f"Found link: {parent_node_id} -> {child_node_id}")
            else:
                current_link.count += 1
                current_link.tps += 1

        if unresolved:
            logger.debug(f"Skipped {unresolved} spans with unresolved parent spans")
        logger.info(f"Aggregated {len(links)} unique links")
        return links
