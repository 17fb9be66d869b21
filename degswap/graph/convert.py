"""Conversion between adjacency matrices and parallel edge vectors."""

import numpy as np
import scipy.sparse


def edges_from_adjacency(
    adj: np.ndarray | scipy.sparse.spmatrix,
) -> tuple[np.ndarray, np.ndarray]:
    """Extract (e_from, e_to) for every nonzero entry, in row-major order.

    Args:
        adj: Dense array or scipy sparse matrix; entry (u, v) != 0 means
            the edge u -> v is present. Values are otherwise ignored.

    Returns:
        Tuple of int64 arrays (e_from, e_to).
    """
    csr = scipy.sparse.csr_matrix(adj, copy=True)
    csr.eliminate_zeros()
    csr.sort_indices()
    rows = np.repeat(np.arange(csr.shape[0], dtype=np.int64), np.diff(csr.indptr))
    return rows, csr.indices.astype(np.int64)


def edges_to_adjacency(
    e_from: np.ndarray, e_to: np.ndarray, n_vertices: int
) -> scipy.sparse.csr_matrix:
    """Build an (n_vertices x n_vertices) 0/1 CSR adjacency matrix.

    Duplicate edges are summed by scipy, so a non-simple input shows up
    as entries greater than one.
    """
    e_from = np.asarray(e_from, dtype=np.int64)
    e_to = np.asarray(e_to, dtype=np.int64)
    data = np.ones(e_from.shape[0], dtype=np.int64)
    return scipy.sparse.csr_matrix(
        (data, (e_from, e_to)), shape=(n_vertices, n_vertices)
    )


def degree_sequences(
    e_from: np.ndarray, e_to: np.ndarray, n_vertices: int
) -> tuple[np.ndarray, np.ndarray]:
    """Out- and in-degree of every vertex (row and column sums).

    Returns:
        (out_degree, in_degree), each int64 of length n_vertices.
    """
    out_deg = np.bincount(np.asarray(e_from, dtype=np.int64), minlength=n_vertices)
    in_deg = np.bincount(np.asarray(e_to, dtype=np.int64), minlength=n_vertices)
    return out_deg, in_deg
