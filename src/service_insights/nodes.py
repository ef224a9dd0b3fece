"""
Node Aggregation

Folds a span sequence into one node per distinct node id.
"""

import logging
from typing import Dict, Iterable

from .enums import NodeType, Relationship
from .models import Node, create_node, format_avg_duration
from .span_types import SpanClassifier

logger = logging.getLogger("node-aggregator")


class NodeAggregator:
    """Builds the node map for one extraction run."""

    def __init__(self, classifier: SpanClassifier):
        self.classifier = classifier

    def create_node_from_span(self, span: Dict, service_name: str) -> Node:
        identity = self.classifier.classify(span)
        duration = span.get('duration', 0)

        node = create_node(
            id=identity.node_id,
            name=identity.name,
            service_name=span.get('serviceName'),
            kind=identity.kind,
            database_type=identity.database_type,
            duration=duration,
            avg_duration=format_avg_duration(duration, 1),
            operations={f"{span.get('operationName')}": 1},
            trace_ids=[span.get('traceId')]
        )

        if node.service_name == service_name and node.kind != NodeType.OUTBOUND:
            node.relationship = Relationship.CENTRAL

        return node

    @staticmethod
    def update_node_from_span(node: Node, span: Dict) -> None:
        operation_name = f"{span.get('operationName')}"
        node.operations[operation_name] = node.operations.get(operation_name, 0) + 1
        node.count += 1
        node.duration += span.get('duration', 0)
        node.avg_duration = format_avg_duration(node.duration, node.count)
        node.trace_ids.append(span.get('traceId'))

    def build(self, spans: Iterable[Dict], service_name: str) -> Dict[str, Node]:
        """Map node id to node, in order of first occurrence."""
        nodes = {}
        span_count = 0

        for span in spans:
            span_count += 1
            node_id = self.classifier.node_id(span)
            existing_node = nodes.get(node_id)

            if existing_node is None:
                new_node = self.create_node_from_span(span, service_name)
                nodes[new_node.id] = new_node
            else:
                self.update_node_from_span(existing_node, span)

        logger.info(f"Aggregated {span_count} spans into {len(nodes)} nodes")
        return nodes
