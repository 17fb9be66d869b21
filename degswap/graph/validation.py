"""Precondition checks for swap-chain inputs.

The chain itself never validates: a non-simple edge list, a structural
zero already present as an edge, or a weight table that misses a vertex
leads to undefined sampling behaviour. These checks are run by callers
(the command-line entry point) before a chain is built. Each validator
returns a list of error strings; an empty list means the input is valid.
"""

import logging

import numpy as np

from degswap.graph.types import EdgeListData

log = logging.getLogger(__name__)


class InvalidGraphError(ValueError):
    """Raised when sampler inputs violate the chain's preconditions."""


def _pairs(e_from: np.ndarray, e_to: np.ndarray) -> np.ndarray:
    return np.stack(
        [np.asarray(e_from, dtype=np.int64), np.asarray(e_to, dtype=np.int64)],
        axis=1,
    )


def validate_edge_list(
    e_from: np.ndarray, e_to: np.ndarray, allow_self_loops: bool = False
) -> list[str]:
    """Check that the edge vectors describe a simple directed graph.

    Checks (cheapest first):
    1. Parallel vectors are 1-D and of equal length
    2. No negative vertex ids
    3. No self-loops (unless allowed)
    4. No duplicate ordered pairs
    """
    errors: list[str] = []
    e_from = np.asarray(e_from)
    e_to = np.asarray(e_to)

    if e_from.ndim != 1 or e_to.ndim != 1 or e_from.shape != e_to.shape:
        errors.append(
            f"e_from and e_to must be 1-D of equal length, got shapes "
            f"{e_from.shape} and {e_to.shape}"
        )
        return errors

    if e_from.size == 0:
        return errors

    if min(e_from.min(), e_to.min()) < 0:
        errors.append("Negative vertex ids in edge list")

    if not allow_self_loops:
        n_loops = int((e_from == e_to).sum())
        if n_loops:
            errors.append(f"Self-loops detected: {n_loops} edges of the form (v, v)")

    uniq, counts = np.unique(_pairs(e_from, e_to), axis=0, return_counts=True)
    dup = uniq[counts > 1]
    if len(dup):
        shown = ", ".join(f"({u},{v})" for u, v in dup[:5].tolist())
        errors.append(f"Duplicate edges: {len(dup)} pairs repeated, e.g. {shown}")

    return errors


def validate_forbidden(
    e_from: np.ndarray,
    e_to: np.ndarray,
    z_from: np.ndarray,
    z_to: np.ndarray,
) -> list[str]:
    """Check that no current edge sits on a structural zero."""
    errors: list[str] = []
    z_from = np.asarray(z_from)
    z_to = np.asarray(z_to)
    if z_from.shape != z_to.shape or z_from.ndim != 1:
        errors.append(
            f"z_from and z_to must be 1-D of equal length, got shapes "
            f"{z_from.shape} and {z_to.shape}"
        )
        return errors
    if z_from.size == 0 or np.asarray(e_from).size == 0:
        return errors

    zeros = set(map(tuple, _pairs(z_from, z_to).tolist()))
    clashes = [
        pair for pair in map(tuple, _pairs(e_from, e_to).tolist()) if pair in zeros
    ]
    if clashes:
        shown = ", ".join(f"({u},{v})" for u, v in clashes[:5])
        errors.append(
            f"{len(clashes)} edges lie on structural zeros, e.g. {shown}"
        )
    return errors


def validate_weights(weights: np.ndarray, n_vertices: int) -> list[str]:
    """Check that the weight matrix is a usable non-negative lookup table."""
    errors: list[str] = []
    w = np.asarray(weights)
    if w.ndim != 2:
        errors.append(f"Weight matrix must be 2-D, got shape {w.shape}")
        return errors
    if w.shape[0] < n_vertices or w.shape[1] < n_vertices:
        errors.append(
            f"Weight matrix shape {w.shape} does not cover {n_vertices} vertices"
        )
    if not np.all(np.isfinite(w)):
        errors.append("Weight matrix contains non-finite entries")
    elif (w < 0).any():
        errors.append("Weight matrix contains negative entries")
    n_zero = int((w == 0).sum())
    if n_zero:
        # Legal, but 0/0 ratios become possible and are always rejected.
        log.debug("Weight matrix has %d zero entries", n_zero)
    return errors


def check_inputs(data: EdgeListData, allow_self_loops: bool = False) -> None:
    """Run every applicable validator and raise if any reports a problem.

    Raises:
        InvalidGraphError: Listing every problem found.
    """
    errors = validate_edge_list(data.e_from, data.e_to, allow_self_loops)
    if data.z_from is not None:
        errors += validate_forbidden(data.e_from, data.e_to, data.z_from, data.z_to)
    if data.weights is not None:
        vertex_arrays = [data.e_from, data.e_to]
        if data.has_structural_zeros:
            vertex_arrays += [data.z_from, data.z_to]
        n_vertices = max(
            (int(a.max()) + 1 for a in vertex_arrays if a.size), default=0
        )
        errors += validate_weights(data.weights, n_vertices)
    if errors:
        raise InvalidGraphError("; ".join(errors))
