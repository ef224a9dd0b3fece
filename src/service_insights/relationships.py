"""
Relationship Classification

Labels every node with its role relative to the central node: downstream
of it, upstream of it, a distributary (another consumer of one of its
upstream dependencies) or unknown. Labels are write-once, which doubles as
the visited marker and keeps both traversals finite on cyclic graphs.
"""

import logging
from typing import Dict, Optional

from .enums import Relationship
from .models import Node
from .traversal import TraversalContext

logger = logging.getLogger("relationship-classifier")


class RelationshipClassifier:
    """Assigns relationships by traversing outward from the central node."""

    def __init__(self, context: TraversalContext):
        self.context = context

    def traverse_downstream(self, starting_node: Node, distributary: bool = False) -> None:
        """Label unlabeled nodes downstream of ``starting_node``, which is left unmodified."""
        label = Relationship.DISTRIBUTARY if distributary else Relationship.DOWNSTREAM
        stack = [iter(self.context.downstream(starting_node.id))]

        while stack:
            for downstream_node in stack[-1]:
                if downstream_node.relationship is None:
                    downstream_node.relationship = label
                    stack.append(iter(self.context.downstream(downstream_node.id)))
                    break
            else:
                stack.pop()

    def traverse_upstream(self, starting_node: Node) -> None:
        """
        Label unlabeled nodes upstream of ``starting_node`` as upstream.

        After the ancestors of each newly labeled upstream node are done, the
        remaining nodes downstream of it are labeled distributary.
        """
        # Each frame holds the upstream neighbours still to visit and the node
        # whose distributary pass runs once they are exhausted
        stack = [(iter(self.context.upstream(starting_node.id)), None)]

        while stack:
            upstream_nodes, finished_node = stack[-1]
            for upstream_node in upstream_nodes:
                if upstream_node.relationship is None:
                    upstream_node.relationship = Relationship.UPSTREAM
                    stack.append((iter(self.context.upstream(upstream_node.id)), upstream_node))
                    break
            else:
                stack.pop()
                if finished_node is not None:
                    self.traverse_downstream(finished_node, distributary=True)

    @staticmethod
    def find_central_node(nodes: Dict[str, Node]) -> Optional[Node]:
        central_nodes = [node for node in nodes.values() if node.relationship == Relationship.CENTRAL]

        if not central_nodes:
            logger.warning("No central node found; all nodes will have an unknown relationship")
            return None

        if len(central_nodes) > 1:
            logger.warning(f"Found {len(central_nodes)} central nodes "
                           f"({[node.id for node in central_nodes]}); traversing from {central_nodes[0].id}")
        return central_nodes[0]

    def classify(self, nodes: Dict[str, Node]) -> Optional[Node]:
        """Label every node and return the node traversal started from."""
        central_node = self.find_central_node(nodes)

        if central_node is not None:
            self.traverse_downstream(central_node)
            self.traverse_upstream(central_node)

        for node in nodes.values():
            # Nodes not previously traversed have an unknown relationship
            if node.relationship is None:
                node.relationship = Relationship.UNKNOWN

        return central_node
