"""
Relationship classification tests.
"""

import logging

from service_insights import Relationship
from service_insights.models import create_link, create_node
from service_insights.relationships import RelationshipClassifier
from service_insights.traversal import TraversalContext


def classify(node_ids, edges, central=('c',)):
    nodes = {node_id: create_node(id=node_id, name=node_id) for node_id in node_ids}
    for node_id in central:
        nodes[node_id].relationship = Relationship.CENTRAL
    links = {(source, target): create_link(source=source, target=target) for source, target in edges}

    RelationshipClassifier(TraversalContext(nodes, links)).classify(nodes)
    return {node_id: node.relationship.value for node_id, node in nodes.items()}


class TestRelationshipClassifier:
    def test_downstream_chain(self):
        relationships = classify(['c', 'd1', 'd2'], [('c', 'd1'), ('d1', 'd2')])

        assert relationships == {'c': 'central', 'd1': 'downstream', 'd2': 'downstream'}

    def test_upstream_chain(self):
        relationships = classify(['u2', 'u1', 'c'], [('u2', 'u1'), ('u1', 'c')])

        assert relationships == {'u2': 'upstream', 'u1': 'upstream', 'c': 'central'}

    def test_sibling_consumers_are_distributary(self):
        relationships = classify(
            ['w', 'u', 'c', 'd', 's', 't', 'z'],
            [('w', 'u'), ('w', 'z'), ('u', 'c'), ('u', 's'), ('s', 't'), ('c', 'd')]
        )

        assert relationships == {
            'w': 'upstream',
            'u': 'upstream',
            'c': 'central',
            'd': 'downstream',
            's': 'distributary',
            't': 'distributary',
            'z': 'distributary',
        }

    def test_downstream_wins_over_distributary(self):
        # d is reachable both from c and from its upstream u
        relationships = classify(['u', 'c', 'd'], [('u', 'c'), ('u', 'd'), ('c', 'd')])

        assert relationships['d'] == 'downstream'

    def test_disconnected_nodes_are_unknown(self):
        relationships = classify(['c', 'x', 'y'], [('x', 'y')])

        assert relationships == {'c': 'central', 'x': 'unknown', 'y': 'unknown'}

    def test_cycle_terminates(self):
        relationships = classify(['c', 'a', 'b'], [('c', 'a'), ('a', 'b'), ('b', 'c'), ('b', 'a')])

        assert relationships == {'c': 'central', 'a': 'downstream', 'b': 'downstream'}

    def test_no_central_node(self, caplog):
        with caplog.at_level(logging.WARNING, logger='relationship-classifier'):
            relationships = classify(['a', 'b'], [('a', 'b')], central=())

        assert relationships == {'a': 'unknown', 'b': 'unknown'}
        assert 'No central node' in caplog.text

    def test_first_central_node_is_the_traversal_root(self, caplog):
        with caplog.at_level(logging.WARNING, logger='relationship-classifier'):
            relationships = classify(
                ['c', 'd', 'c2', 'e'], [('c', 'd'), ('c2', 'e')], central=('c', 'c2')
            )

        assert relationships == {'c': 'central', 'd': 'downstream', 'c2': 'central', 'e': 'unknown'}
        assert 'traversing from c' in caplog.text

    def test_deep_chain(self):
        node_ids = ['c'] + [f"d{i}" for i in range(3000)]
        relationships = classify(node_ids, list(zip(node_ids, node_ids[1:])))

        assert relationships['d2999'] == 'downstream'
