"""
Service insights rendering - text tables and a matplotlib drawing of an
extracted graph.
"""

import logging
from typing import Dict, Optional

import networkx as nx

logger = logging.getLogger("visualize-graph")

RELATIONSHIP_COLORS = {
    'central': 'gold',
    'upstream': 'lightsteelblue',
    'downstream': 'lightgreen',
    'distributary': 'plum',
    'unknown': 'lightgray',
}


def to_networkx(result: Dict) -> nx.DiGraph:
    """Build a NetworkX graph from an extraction result, keeping node and link attributes."""
    graph = nx.DiGraph()

    for node in result['nodes']:
        graph.add_node(node['id'], **node)

    for link in result['links']:
        graph.add_edge(link['source'], link['target'], weight=link['count'], **link)

    return graph


def print_graph_table(result: Dict) -> None:
    """Print links in a table, busiest first."""
    print("\n" + "="*80)
    print("SERVICE INSIGHTS LINKS")
    print("="*80)

    links = sorted(result['links'], key=lambda link: link['count'], reverse=True)

    print(f"{'Source':<25} {'→':<3} {'Target':<25} {'Count':>8} {'Flags':<15}")
    print("-" * 80)

    for link in links:
        flags = []
        if link.get('invalidCycleDetected'):
            flags.append('CYCLE')
        if link['isUninstrumented']:
            flags.append('UNINSTRUMENTED')
        print(f"{link['source']:<25} → {link['target']:<25} {link['count']:>8,} {' '.join(flags):<15}")

    print("-" * 80)
    print(f"Total links: {len(links)}")
    print(f"Total calls: {sum(link['count'] for link in links):,}")


def print_node_summary(result: Dict) -> None:
    """Print one line per node grouped by relationship, then the violation summary."""
    summary = result['summary']

    print("\n" + "="*60)
    print("SERVICE INSIGHTS SUMMARY")
    print("="*60)
    print(f"Traces considered: {summary['tracesConsidered']}")
    if summary['traceLimitReached']:
        print("Trace limit reached: results may be incomplete")

    for relationship in RELATIONSHIP_COLORS:
        nodes = [node for node in result['nodes'] if node['relationship'] == relationship]
        if not nodes:
            continue
        print(f"\n{relationship.upper()} ({len(nodes)})")
        for node in nodes:
            marker = "  ⚠ cycle" if node['invalidCycleDetected'] else ""
            print(f"   {node['name']} [{node['kind']}] spans={node['count']} avg={node['avgDuration']}{marker}")

    print()
    if summary['hasViolations']:
        for violation, count in summary['violations'].items():
            print(f"🔴 {violation}: {count}")
    else:
        print("🟢 No violations")
    print("="*60)


def visualize_graph(result: Dict, output_file: Optional[str] = None, show: bool = False) -> None:
    """Draw the graph with matplotlib, coloured by relationship."""
    import matplotlib
    if not show:
        matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    graph = to_networkx(result)

    plt.figure(figsize=(16, 12))
    pos = nx.spring_layout(graph, k=2, iterations=200, seed=42)

    node_colors = [RELATIONSHIP_COLORS.get(graph.nodes[n].get('relationship'), 'lightgray')
                   for n in graph.nodes()]
    edge_colors = ['red' if graph.nodes[n]['invalidCycleDetected'] else 'navy' for n in graph.nodes()]
    nx.draw_networkx_nodes(graph, pos, node_color=node_colors, node_size=3000,
                           alpha=0.9, linewidths=2, edgecolors=edge_colors)
    nx.draw_networkx_labels(graph, pos, labels={n: graph.nodes[n]['name'] for n in graph.nodes()},
                            font_size=9, font_weight='bold')

    cycle_edges = [(u, v) for u, v, data in graph.edges(data=True) if data.get('invalidCycleDetected')]
    uninstrumented_edges = [(u, v) for u, v, data in graph.edges(data=True) if data.get('isUninstrumented')]
    normal_edges = [edge for edge in graph.edges() if edge not in cycle_edges and edge not in uninstrumented_edges]

    nx.draw_networkx_edges(graph, pos, edgelist=normal_edges, edge_color='darkblue',
                           arrows=True, arrowsize=20, connectionstyle='arc3,rad=0.1')
    nx.draw_networkx_edges(graph, pos, edgelist=cycle_edges, edge_color='red', width=2.5,
                           arrows=True, arrowsize=20, connectionstyle='arc3,rad=0.1')
    nx.draw_networkx_edges(graph, pos, edgelist=uninstrumented_edges, edge_color='gray',
                           style='dashed', arrows=True, arrowsize=20)

    edge_labels = {(u, v): f"{data['count']:,}" for u, v, data in graph.edges(data=True)}
    nx.draw_networkx_edge_labels(graph, pos, edge_labels, font_size=8,
                                 bbox=dict(boxstyle='round,pad=0.3', facecolor='white', alpha=0.9))

    violations = result['summary']['violations']
    legend_text = "\n".join(f"{name}: {count}" for name, count in violations.items()) or "No violations"
    plt.text(0.02, 0.98, legend_text, transform=plt.gca().transAxes, verticalalignment='top',
             bbox=dict(boxstyle='round', facecolor='lightyellow', alpha=0.9), fontsize=11)

    plt.title("Service Insights\n(colour shows relationship to the central service)", size=16, pad=20)
    plt.axis('off')

    if output_file:
        plt.savefig(output_file, dpi=150, bbox_inches='tight')
        logger.info(f"Graph visualization saved to {output_file}")

    if show:
        plt.show()
    plt.close()
