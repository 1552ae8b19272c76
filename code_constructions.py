"""
Code construction and channel utilities for tests and demos.
"""

import numpy as np

# -----------------------------
# Repetition code
# -----------------------------
def make_repetition(n):
    """Return H matrix for n-bit repetition code (1 information bit)."""
    H = np.zeros((n - 1, n), dtype=int)
    for i in range(n - 1):
        H[i, i] = 1
        H[i, i + 1] = 1
    return H


# -----------------------------
# Random regular LDPC
# -----------------------------
def make_random_regular_ldpc(m, n, row_weight, col_weight, max_passes=100, rng=None):
    """
    Generate a random (m x n) LDPC parity check matrix with fixed row and column weights.
    """
    assert m * row_weight == n * col_weight, "Inconsistent dimensions"
    rng = np.random.default_rng(rng)

    row_ones = np.repeat(np.arange(m), row_weight)
    col_ones = np.repeat(np.arange(n), col_weight)
    rng.shuffle(col_ones)
    edges = list(zip(row_ones, col_ones))

    # break up repeated (row, col) pairs by swapping columns with another edge
    for _ in range(max_passes):
        used = set()
        duplicates = False
        for i, (r1, c1) in enumerate(edges):
            if (r1, c1) not in used:
                used.add((r1, c1))
                continue
            duplicates = True
            candidates = [
                j
                for j in range(len(edges))
                if j != i
                and (r1, edges[j][1]) not in used
                and (edges[j][0], c1) not in used
                and r1 != edges[j][0]
                and c1 != edges[j][1]
            ]
            if candidates:
                j = candidates[rng.integers(len(candidates))]
                r2, c2 = edges[j]
                edges[i], edges[j] = (r1, c2), (r2, c1)
                used.add(edges[i])
            else:
                used.add(edges[i])
        if not duplicates:
            break

    H = np.zeros((m, n), dtype=int)
    for r, c in edges:
        H[r, c] = 1

    # Sanity check
    assert np.all(np.count_nonzero(H, axis=1) == row_weight)
    assert np.all(np.count_nonzero(H, axis=0) == col_weight)
    return H


# -----------------------------
# BPSK over AWGN
# -----------------------------
def bpsk_awgn_llr(codeword, n0, rng=None):
    """
    Send a codeword over BPSK (0 -> +1, 1 -> -1) with AWGN of PSD n0.

    Args:
        codeword (np.ndarray): 0/1 vector.
        n0 (float): Noise power spectral density, noise variance is n0 / 2.

    Returns:
        np.ndarray: Received LLRs ln(p(rx|0) / p(rx|1)) = 4 / n0 * rx.
    """
    rng = np.random.default_rng(rng)
    tx = 1.0 - 2.0 * np.asarray(codeword, dtype=float)
    rx = tx + rng.normal(0.0, np.sqrt(n0 / 2), size=tx.shape)
    return 4.0 / n0 * rx


if __name__ == "__main__":
    rep = make_repetition(3)
    print(rep)
    llr = bpsk_awgn_llr(np.zeros(3, dtype=int), 1.0)
    print(llr)
