import matplotlib.pyplot as plt
import networkx as nx

from code_constructions import make_repetition
from tanner_graph import TannerGraph


def to_networkx(graph):
    """Bipartite multigraph with bit nodes b0.. and check nodes c0..; one edge per graph edge."""
    B = nx.MultiGraph()
    bit_labels = [f"b{i}" for i in range(graph.n_bit)]
    check_labels = [f"c{i}" for i in range(graph.n_check)]
    B.add_nodes_from(bit_labels, bipartite=0)
    B.add_nodes_from(check_labels, bipartite=1)

    for e, (b, c) in enumerate(zip(graph.idx_bit, graph.idx_check)):
        B.add_edge(bit_labels[b], check_labels[c], key=e)
    return B


def plot_tanner_graph(graph, ax=None, show=False):
    """Draw the Tanner graph, bits as circles on the left, checks as squares on the right."""
    B = to_networkx(graph)
    bit_labels = [n for n, side in B.nodes(data="bipartite") if side == 0]
    check_labels = [n for n, side in B.nodes(data="bipartite") if side == 1]

    if ax is None:
        _, ax = plt.subplots()

    pos = nx.bipartite_layout(B, bit_labels)
    nx.draw_networkx_nodes(
        B, pos, nodelist=bit_labels, node_color="lightblue", node_shape="o", ax=ax
    )
    nx.draw_networkx_nodes(
        B, pos, nodelist=check_labels, node_color="lightgreen", node_shape="s", ax=ax
    )
    nx.draw_networkx_labels(B, pos, ax=ax)
    nx.draw_networkx_edges(B, pos, ax=ax)
    ax.set_axis_off()

    if show:
        plt.show()
    return ax


if __name__ == "__main__":
    plot_tanner_graph(TannerGraph.from_parity_check(make_repetition(5)), show=True)
