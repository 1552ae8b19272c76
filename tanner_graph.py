"""
Tanner graph of a binary LDPC code, built from a flat edge list.

Each edge is given by its linear index

    idx = n_check * bit + check

i.e. the 0-based column-major position of the corresponding 1 in the
(n_check x n_bit) parity-check matrix H. This is what MATLAB's ``find(H) - 1``
returns, so edge lists exported from MATLAB can be passed in unchanged.

Design:
    - parallel edge arrays idx_bit / idx_check
    - CSR adjacency for both node types (ptr + edge index arrays)
    - adjacency keeps the order of first appearance in the edge list
    - SciPy sparse H for syndrome computation
"""

import logging
from functools import cached_property

import numpy as np
import scipy.sparse as sp

logger = logging.getLogger(__name__)


class InvalidGraphStructure(ValueError):
    """Edge list or code dimensions do not describe a Tanner graph."""


def edges_to_csr(node_of_edge, n_nodes):
    """Group edge indices by node.

    Args:
        node_of_edge (np.ndarray): Node index of every edge.
        n_nodes (int): Number of nodes.

    Returns:
        tuple: (degree, ptr, edges) where edges[ptr[i]:ptr[i + 1]] are the
        edges of node i in increasing edge index.
    """
    degree = np.bincount(node_of_edge, minlength=n_nodes)
    ptr = np.zeros(n_nodes + 1, dtype=np.int64)
    ptr[1:] = np.cumsum(degree)
    # stable sort keeps insertion order inside every node
    edges = np.argsort(node_of_edge, kind="stable").astype(np.int64)
    return degree.astype(np.int64), ptr, edges


def _as_edge_indices(idx_linear, n_edge, n_linear):
    idx = np.asarray(idx_linear)
    if idx.ndim != 1 or idx.size != n_edge:
        raise InvalidGraphStructure(
            f"expected {n_edge} edge indices, got shape {idx.shape}"
        )
    if idx.size == 0:
        return np.zeros(0, dtype=np.int64)

    if np.issubdtype(idx.dtype, np.floating):
        if not np.all(np.isfinite(idx)) or np.any(idx != np.floor(idx)):
            raise InvalidGraphStructure("edge indices must be integral")
    elif not np.issubdtype(idx.dtype, np.integer):
        raise InvalidGraphStructure(f"unsupported edge index dtype {idx.dtype}")

    if idx.min() < 0 or idx.max() >= n_linear:
        raise InvalidGraphStructure(
            f"edge indices must lie in [0, {n_linear}), "
            f"got [{idx.min()}, {idx.max()}]"
        )
    return idx.astype(np.int64)


class TannerGraph:
    """Bit nodes, check nodes and the edges between them."""

    def __init__(self, n_bit, n_check, n_edge, idx_linear):
        """
        Args:
            n_bit (int): Number of bit nodes (columns of H).
            n_check (int): Number of check nodes (rows of H).
            n_edge (int): Number of edges (ones in H).
            idx_linear (array_like): Linear index of every edge, see module doc.
                Copied, the caller keeps ownership of the buffer.
        """
        if int(n_bit) <= 0 or int(n_check) <= 0:
            raise InvalidGraphStructure(
                f"n_bit and n_check must be positive, got {n_bit} and {n_check}"
            )
        if int(n_edge) < 0:
            raise InvalidGraphStructure(f"n_edge must be non-negative, got {n_edge}")

        self.n_bit = int(n_bit)
        self.n_check = int(n_check)
        self.n_edge = int(n_edge)

        idx = _as_edge_indices(idx_linear, self.n_edge, self.n_bit * self.n_check)
        self.idx_bit = idx // self.n_check
        self.idx_check = idx % self.n_check

        self.deg_bit, self.bit_ptr, self.bit_edges = edges_to_csr(
            self.idx_bit, self.n_bit
        )
        self.deg_check, self.check_ptr, self.check_edges = edges_to_csr(
            self.idx_check, self.n_check
        )

        logger.debug(
            "Built Tanner graph: %d bits, %d checks, %d edges",
            self.n_bit,
            self.n_check,
            self.n_edge,
        )

    @classmethod
    def from_parity_check(cls, H):
        """Build the graph of a dense or SciPy sparse (n_check x n_bit) matrix.

        Edges are numbered column by column, rows increasing inside a column.
        """
        H_csc = sp.csc_matrix(H)
        H_csc.eliminate_zeros()
        H_csc.sort_indices()
        n_check, n_bit = H_csc.shape

        bits = np.repeat(np.arange(n_bit), np.diff(H_csc.indptr))
        idx_linear = n_check * bits + H_csc.indices
        return cls(n_bit, n_check, len(idx_linear), idx_linear)

    def linear_indices(self):
        """Return the linear index of every edge."""
        return self.n_check * self.idx_bit + self.idx_check

    def edges_of_bit(self, b):
        return self.bit_edges[self.bit_ptr[b] : self.bit_ptr[b + 1]]

    def edges_of_check(self, c):
        return self.check_edges[self.check_ptr[c] : self.check_ptr[c + 1]]

    @cached_property
    def H(self):
        """Parity-check matrix; duplicated edges show up as entries > 1."""
        data = np.ones(self.n_edge, dtype=np.int64)
        return sp.csr_matrix(
            (data, (self.idx_check, self.idx_bit)), shape=(self.n_check, self.n_bit)
        )

    def syndrome(self, codeword):
        """Parity of every check for a 0/1 vector of length n_bit."""
        return self.H.dot(np.asarray(codeword, dtype=np.int64)) % 2

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(n_bit={self.n_bit}, "
            f"n_check={self.n_check}, n_edge={self.n_edge})"
        )
