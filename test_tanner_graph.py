import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest
import scipy.sparse as sp

from code_constructions import make_random_regular_ldpc, make_repetition
from tanner_graph import InvalidGraphStructure, TannerGraph
from tanner_plot import plot_tanner_graph, to_networkx


@pytest.fixture
def rep3():
    return TannerGraph(3, 2, 4, [0, 1, 2, 5])


def test_edge_decoding(rep3):
    np.testing.assert_array_equal(rep3.idx_bit, [0, 0, 1, 2])
    np.testing.assert_array_equal(rep3.idx_check, [0, 1, 0, 1])
    np.testing.assert_array_equal(rep3.deg_bit, [2, 1, 1])
    np.testing.assert_array_equal(rep3.deg_check, [2, 2])


def test_adjacency_keeps_insertion_order():
    # edges listed out of bit order: bit 1, bit 0, bit 1, bit 0
    g = TannerGraph(2, 2, 4, [2, 1, 3, 0])
    np.testing.assert_array_equal(g.edges_of_bit(0), [1, 3])
    np.testing.assert_array_equal(g.edges_of_bit(1), [0, 2])
    np.testing.assert_array_equal(g.edges_of_check(0), [0, 3])
    np.testing.assert_array_equal(g.edges_of_check(1), [1, 2])


def test_every_edge_listed_once():
    H = make_random_regular_ldpc(6, 12, 4, 2, rng=1)
    g = TannerGraph.from_parity_check(H)

    assert g.deg_bit.sum() == g.deg_check.sum() == g.n_edge == H.sum()
    np.testing.assert_array_equal(np.sort(g.bit_edges), np.arange(g.n_edge))
    np.testing.assert_array_equal(np.sort(g.check_edges), np.arange(g.n_edge))
    for b in range(g.n_bit):
        assert np.all(g.idx_bit[g.edges_of_bit(b)] == b)
    for c in range(g.n_check):
        assert np.all(g.idx_check[g.edges_of_check(c)] == c)


def test_from_parity_check_column_major():
    H = make_repetition(3)  # [[1, 1, 0], [0, 1, 1]]
    g = TannerGraph.from_parity_check(H)
    np.testing.assert_array_equal(g.linear_indices(), [0, 2, 3, 5])

    g_sparse = TannerGraph.from_parity_check(sp.csr_matrix(H))
    np.testing.assert_array_equal(g_sparse.linear_indices(), g.linear_indices())
    np.testing.assert_array_equal(g.H.toarray(), H)


def test_syndrome(rep3):
    np.testing.assert_array_equal(rep3.syndrome([0, 0, 0]), [0, 0])
    np.testing.assert_array_equal(rep3.syndrome([1, 1, 1]), [0, 0])
    np.testing.assert_array_equal(rep3.syndrome([0, 0, 1]), [0, 1])
    np.testing.assert_array_equal(rep3.syndrome([1, 0, 0]), [1, 1])


def test_float_indices_accepted():
    g = TannerGraph(3, 2, 4, np.array([0.0, 1.0, 2.0, 5.0]))
    np.testing.assert_array_equal(g.linear_indices(), [0, 1, 2, 5])
    assert g.idx_bit.dtype == np.int64


def test_caller_buffer_not_retained():
    idx = np.array([0, 1, 2, 5])
    g = TannerGraph(3, 2, 4, idx)
    idx[:] = 0
    np.testing.assert_array_equal(g.linear_indices(), [0, 1, 2, 5])


def test_duplicate_edges_and_isolated_nodes_accepted():
    g = TannerGraph(3, 2, 2, [0, 0])
    np.testing.assert_array_equal(g.deg_bit, [2, 0, 0])
    np.testing.assert_array_equal(g.deg_check, [2, 0])
    assert g.edges_of_bit(1).size == 0
    # a bit counted twice in one check never violates it
    np.testing.assert_array_equal(g.syndrome([1, 0, 0]), [0, 0])


def test_empty_edge_list():
    g = TannerGraph(2, 1, 0, [])
    assert g.n_edge == 0
    np.testing.assert_array_equal(g.check_ptr, [0, 0])
    np.testing.assert_array_equal(g.syndrome([1, 1]), [0])


@pytest.mark.parametrize(
    "args",
    [
        (0, 2, 0, []),
        (3, 0, 0, []),
        (3, 2, -1, []),
        (3, 2, 4, [0, 1, 2]),
        (3, 2, 2, [0, 6]),
        (3, 2, 2, [-1, 0]),
        (3, 2, 2, [0.5, 1.0]),
        (3, 2, 2, [np.nan, 1.0]),
        (3, 2, 2, [[0, 1]]),
    ],
)
def test_invalid_structure_rejected(args):
    with pytest.raises(InvalidGraphStructure):
        TannerGraph(*args)


def test_invalid_structure_is_value_error():
    assert issubclass(InvalidGraphStructure, ValueError)


def test_to_networkx(rep3):
    B = to_networkx(rep3)
    assert B.number_of_nodes() == 5
    assert B.number_of_edges() == 4
    assert B.has_edge("b0", "c1")
    assert not B.has_edge("b1", "c1")
    assert B.nodes["c0"]["bipartite"] == 1

    dup = to_networkx(TannerGraph(1, 1, 2, [0, 0]))
    assert dup.number_of_edges() == 2


def test_plot_tanner_graph(rep3):
    ax = plot_tanner_graph(rep3)
    assert len(ax.collections) >= 2
    plt.close("all")
