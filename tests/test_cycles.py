"""
Cycle detection tests.

Tests verify:
- Acyclic graphs are left untouched
- Every node on a cycle is flagged and the cycle count matches
- Links are flagged only when both endpoints are flagged
- Long chains do not hit the recursion limit
"""

from service_insights.cycles import CycleDetector
from service_insights.models import create_link, create_node


def build_graph(node_ids, edges):
    nodes = {node_id: create_node(id=node_id, name=node_id) for node_id in node_ids}
    links = {(source, target): create_link(source=source, target=target) for source, target in edges}
    return nodes, links


def flagged(nodes):
    return {node_id for node_id, node in nodes.items() if node.invalid_cycle_detected}


class TestAcyclic:
    def test_diamond(self):
        nodes, links = build_graph('abcd', [('a', 'b'), ('a', 'c'), ('b', 'd'), ('c', 'd')])

        assert CycleDetector().detect(nodes, links) == 0
        assert flagged(nodes) == set()
        assert not any(link.invalid_cycle_detected for link in links.values())

    def test_no_links(self):
        nodes, links = build_graph('ab', [])
        assert CycleDetector().detect(nodes, links) == 0


class TestCycles:
    def test_two_node_cycle(self):
        nodes, links = build_graph('ab', [('a', 'b'), ('b', 'a')])

        assert CycleDetector().detect(nodes, links) == 1
        assert flagged(nodes) == {'a', 'b'}
        assert nodes['a'].invalid_cycle_path == ['a', 'b']
        assert all(link.invalid_cycle_detected for link in links.values())
        assert links[('a', 'b')].invalid_cycle_path == ['a', 'b']

    def test_cycle_with_tail(self):
        nodes, links = build_graph('xabcd', [('x', 'a'), ('a', 'b'), ('b', 'c'), ('c', 'a'), ('a', 'd')])

        assert CycleDetector().detect(nodes, links) == 1
        assert flagged(nodes) == {'a', 'b', 'c'}
        assert nodes['b'].invalid_cycle_path == ['a', 'b', 'c']
        assert not links[('x', 'a')].invalid_cycle_detected
        assert not links[('a', 'd')].invalid_cycle_detected
        assert links[('c', 'a')].invalid_cycle_detected

    def test_disconnected_cycles(self):
        nodes, links = build_graph('abcde', [('a', 'b'), ('b', 'a'), ('c', 'd'), ('d', 'e'), ('e', 'c')])

        assert CycleDetector().detect(nodes, links) == 2
        assert flagged(nodes) == {'a', 'b', 'c', 'd', 'e'}

    def test_cycles_through_shared_nodes_are_all_counted(self):
        nodes, links = build_graph('abcd', [('a', 'b'), ('a', 'c'), ('b', 'd'), ('c', 'd'), ('d', 'a')])

        assert CycleDetector().detect(nodes, links) == 2
        assert flagged(nodes) == {'a', 'b', 'c', 'd'}
        assert nodes['a'].invalid_cycle_path == ['a', 'b', 'd']
        assert nodes['c'].invalid_cycle_path == ['a', 'c', 'd']
        assert all(link.invalid_cycle_detected for link in links.values())
        assert links[('c', 'd')].invalid_cycle_path == ['a', 'c', 'd']

    def test_first_recorded_path_is_kept(self):
        nodes, links = build_graph('abc', [('a', 'b'), ('b', 'a'), ('b', 'c'), ('c', 'b')])

        assert CycleDetector().detect(nodes, links) == 2
        assert nodes['b'].invalid_cycle_path == ['a', 'b']
        assert nodes['c'].invalid_cycle_path == ['b', 'c']

    def test_flagged_links_have_flagged_endpoints(self):
        nodes, links = build_graph('abcdef', [
            ('a', 'b'), ('b', 'c'), ('c', 'a'), ('c', 'd'), ('d', 'e'), ('e', 'f'), ('f', 'd'),
        ])
        CycleDetector().detect(nodes, links)

        for link in links.values():
            if link.invalid_cycle_detected:
                assert nodes[link.source].invalid_cycle_detected
                assert nodes[link.target].invalid_cycle_detected
        # c and d sit on different cycles, so the link between them is flagged too
        assert links[('c', 'd')].invalid_cycle_detected

    def test_long_chain_closing_cycle(self):
        node_ids = [f"svc-{i}" for i in range(5000)]
        edges = list(zip(node_ids, node_ids[1:])) + [(node_ids[-1], node_ids[0])]
        nodes, links = build_graph(node_ids, edges)

        assert CycleDetector().detect(nodes, links) == 1
        assert len(flagged(nodes)) == 5000
