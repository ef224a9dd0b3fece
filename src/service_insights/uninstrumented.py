"""
Uninstrumented Dependencies

A mesh node with nothing downstream means the mesh forwarded a request to a
service that never reported a span, so a placeholder node is added behind it.
An outbound call site with nothing downstream is itself the boundary of trace
visibility and is relabeled in place.
"""

import logging
from typing import Dict, Tuple

from .enums import NodeType
from .models import Link, Node, create_link, create_node
from .traversal import TraversalContext

logger = logging.getLogger("uninstrumented-synthesizer")

UNINSTRUMENTED_ID_SUFFIX = '-missing-trace'
UNINSTRUMENTED_NAME = 'Uninstrumented Service'


class UninstrumentedSynthesizer:
    """Marks dependency boundaries that have no further trace visibility."""

    def __init__(self, context: TraversalContext):
        self.context = context

    @staticmethod
    def create_uninstrumented_node(node: Node) -> Node:
        return create_node(
            id=f"{node.id}{UNINSTRUMENTED_ID_SUFFIX}",
            name=UNINSTRUMENTED_NAME,
            service_name='unknown',
            kind=NodeType.UNINSTRUMENTED,
            count=node.count,
            operations=dict(node.operations),
            duration=node.duration,
            avg_duration=node.avg_duration,
            trace_ids=list(node.trace_ids),
            relationship=node.relationship
        )

    def synthesize(self, nodes: Dict[str, Node], links: Dict[Tuple[str, str], Link]) -> int:
        """
        Add placeholder nodes and links, relabel outbound dead ends.

        Returns:
            Number of uninstrumented dependencies found
        """
        uninstrumented_count = 0

        for node in list(nodes.values()):
            if self.context.has_downstream(node.id):
                continue

            if node.kind == NodeType.MESH:
                uninstrumented_count += 1
                uninstrumented_node = self.create_uninstrumented_node(node)
                nodes[uninstrumented_node.id] = uninstrumented_node

                link = create_link(
                    source=node.id,
                    target=uninstrumented_node.id,
                    is_uninstrumented=True
                )
                links[link.key] = link
                logger.debug(f"Added uninstrumented node behind mesh node {node.id}")

            elif node.kind == NodeType.OUTBOUND:
                uninstrumented_count += 1
                node.kind = NodeType.UNINSTRUMENTED
                logger.debug(f"Relabeled outbound node {node.id} as uninstrumented")

        if uninstrumented_count:
            logger.info(f"Found {uninstrumented_count} uninstrumented dependencies")
        return uninstrumented_count
