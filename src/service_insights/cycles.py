"""
Cycle Detection

Service dependencies are expected to form a DAG. Nodes and links taking part
in a directed cycle are flagged as invalid so the cycle can be surfaced as a
violation.
"""

import logging
from typing import Dict, List, Tuple

import networkx as nx

from .models import Link, Node
from .traversal import build_networkx_graph

logger = logging.getLogger("cycle-detector")


class CycleDetector:
    """Finds directed cycles in the node/link graph and flags their members."""

    def detect(self, nodes: Dict[str, Node], links: Dict[Tuple[str, str], Link]) -> int:
        """
        Flag nodes and links on directed cycles.

        Args:
            nodes: Node map of the current extraction
            links: Link map of the current extraction

        Returns:
            Number of elementary cycles found
        """
        graph = build_networkx_graph(nodes, links)
        if nx.is_directed_acyclic_graph(graph):
            return 0

        cycles = self._find_cycles(graph)
        for cycle_path in cycles:
            self._flag_nodes(cycle_path, nodes)
            logger.debug(f"Found cycle: {' -> '.join(cycle_path + [cycle_path[0]])}")
        flagged_links = self._flag_links(nodes, links)

        logger.info(f"Found {len(cycles)} cycles involving "
                    f"{sum(1 for node in nodes.values() if node.invalid_cycle_detected)} nodes "
                    f"and {flagged_links} links")
        return len(cycles)

    @staticmethod
    def _find_cycles(graph: nx.DiGraph) -> List[List[str]]:
        """Elementary cycles in node order, each starting at its earliest node."""
        order = {node_id: index for index, node_id in enumerate(graph.nodes)}

        # Only strongly connected regions with more than one node can hold a cycle
        cyclic_nodes = set()
        for component in nx.strongly_connected_components(graph):
            if len(component) > 1:
                cyclic_nodes.update(component)
        cyclic_nodes.update(node_id for node_id in graph.nodes if graph.has_edge(node_id, node_id))

        cycles = []
        for cycle in nx.simple_cycles(graph.subgraph(cyclic_nodes)):
            start = min(range(len(cycle)), key=lambda i: order[cycle[i]])
            cycles.append(cycle[start:] + cycle[:start])

        cycles.sort(key=lambda cycle: [order[node_id] for node_id in cycle])
        return cycles

    @staticmethod
    def _flag_nodes(cycle_path: List[str], nodes: Dict[str, Node]) -> None:
        for node_id in cycle_path:
            node = nodes[node_id]
            node.invalid_cycle_detected = True
            if node.invalid_cycle_path is None:
                node.invalid_cycle_path = list(cycle_path)

    @staticmethod
    def _flag_links(nodes: Dict[str, Node], links: Dict[Tuple[str, str], Link]) -> int:
        """Flag links whose endpoints are both flagged."""
        flagged = 0
        for link in links.values():
            source = nodes[link.source]
            target = nodes[link.target]
            if source.invalid_cycle_detected and target.invalid_cycle_detected:
                link.invalid_cycle_detected = True
                link.invalid_cycle_path = source.invalid_cycle_path
                flagged += 1
        return flagged
