"""
Traversal Context

Transient adjacency for the graph stages. Nodes and links stay free of
traversal state; the stages read neighbours from a NetworkX directed graph
keyed by node id instead.
"""

from typing import Dict, List, Tuple

import networkx as nx

from .models import Link, Node


def build_networkx_graph(nodes: Dict[str, Node], links: Dict[Tuple[str, str], Link]) -> nx.DiGraph:
    """Build a NetworkX directed graph, preserving node and link order."""
    graph = nx.DiGraph()

    for node_id in nodes:
        graph.add_node(node_id)

    for link in links.values():
        graph.add_edge(link.source, link.target, weight=link.count)

    return graph


class TraversalContext:
    """Upstream/downstream neighbours of every node for one extraction run."""

    def __init__(self, nodes: Dict[str, Node], links: Dict[Tuple[str, str], Link]):
        self.nodes = nodes
        self.graph = build_networkx_graph(nodes, links)

    def downstream(self, node_id: str) -> List[Node]:
        return [self.nodes[target] for target in self.graph.successors(node_id)]

    def upstream(self, node_id: str) -> List[Node]:
        return [self.nodes[source] for source in self.graph.predecessors(node_id)]

    def has_downstream(self, node_id: str) -> bool:
        return self.graph.out_degree(node_id) > 0
