"""Entry points taking parallel edge vectors and returning the rewired graph."""

import logging
from collections.abc import Sequence

import numpy as np

from degswap.reproducibility.seed import SEED_FROM_ENTROPY
from degswap.swap.chain import SwapChain
from degswap.swap.diagnostics import SwapDiagnostics

log = logging.getLogger(__name__)

Vector = Sequence[int] | np.ndarray


def _check_nonempty(e_from: Vector, n: int) -> None:
    if n > 0 and len(e_from) == 0:
        raise ValueError("edge list must contain at least one edge when n > 0")


def simple_swap_n(
    e_from: Vector,
    e_to: Vector,
    n: int,
    swap_p: float,
    seed: int | None = SEED_FROM_ENTROPY,
    allow_self_loops: bool = False,
) -> tuple[np.ndarray, np.ndarray]:
    """Run ``n`` uniform checkerboard-swap attempts.

    Draws (asymptotically) from the uniform distribution over simple
    directed graphs with the input's in- and out-degree sequences. The
    inputs are not modified.

    Args:
        e_from: Tail vertex of each edge (length m >= 1).
        e_to: Head vertex of each edge.
        n: Number of swap attempts.
        swap_p: Probability of performing a valid swap, in (0, 1).
        seed: Generator seed; -1 (default) or None draws OS entropy.
        allow_self_loops: Permit swaps that create (v, v) edges.

    Returns:
        (e_from, e_to) of the final graph as int64 arrays.
    """
    _check_nonempty(e_from, n)
    chain = SwapChain(
        e_from, e_to, swap_p=swap_p, seed=seed, allow_self_loops=allow_self_loops
    )
    diagnostics = chain.run(n)
    log.info(
        "Uniform chain: m=%d, %d steps, %d swaps (acceptance %.3f), seed=%d",
        chain.n_edges,
        n,
        diagnostics.n_accepted,
        diagnostics.acceptance_rate(),
        chain.seed,
    )
    return chain.edges


def swap_n(
    e_from: Vector,
    e_to: Vector,
    n: int,
    weights: np.ndarray,
    z_from: Vector = (),
    z_to: Vector = (),
    seed: int | None = SEED_FROM_ENTROPY,
    allow_self_loops: bool = False,
) -> tuple[np.ndarray, np.ndarray, SwapDiagnostics]:
    """Run ``n`` weighted checkerboard-swap attempts with structural zeros.

    The stationary probability of a graph is proportional to the product
    of ``weights[u, v]`` over its edges, restricted to graphs avoiding
    every (z_from[k], z_to[k]) position.

    Args:
        e_from: Tail vertex of each edge (length m >= 1).
        e_to: Head vertex of each edge.
        n: Number of swap attempts.
        weights: Non-negative 2-D array indexed by vertex id.
        z_from: Tail vertex of each structural zero.
        z_to: Head vertex of each structural zero.
        seed: Generator seed; -1 (default) or None draws OS entropy.
        allow_self_loops: Permit swaps that create (v, v) edges.

    Returns:
        (e_from, e_to, diagnostics) with one diagnostic row per attempt.
    """
    _check_nonempty(e_from, n)
    chain = SwapChain(
        e_from,
        e_to,
        weights=weights,
        forbidden=(z_from, z_to),
        seed=seed,
        allow_self_loops=allow_self_loops,
    )
    diagnostics = chain.run(n)
    log.info(
        "Weighted chain: m=%d, %d steps, %d proposals, %d swaps, seed=%d",
        chain.n_edges,
        n,
        diagnostics.n_proposals,
        diagnostics.n_accepted,
        chain.seed,
    )
    e_from_out, e_to_out = chain.edges
    return e_from_out, e_to_out, diagnostics


def collect_samples(
    chain: SwapChain, n_samples: int, burn_in: int, thin: int
) -> tuple[list[tuple[np.ndarray, np.ndarray]], SwapDiagnostics]:
    """Advance ``chain`` by ``burn_in`` steps, then take ``n_samples`` snapshots
    spaced ``thin`` steps apart.

    Returns:
        (samples, diagnostics) where diagnostics covers all
        burn_in + n_samples * thin steps.
    """
    if n_samples < 1:
        raise ValueError(f"n_samples must be >= 1, got {n_samples}")
    if burn_in < 0 or thin < 1:
        raise ValueError(f"need burn_in >= 0 and thin >= 1, got {burn_in}, {thin}")

    records = [chain.run(burn_in)]
    samples: list[tuple[np.ndarray, np.ndarray]] = []
    for k in range(n_samples):
        records.append(chain.run(thin))
        samples.append(chain.edges)
        log.debug("Sample %d/%d collected", k + 1, n_samples)
    return samples, SwapDiagnostics.concatenate(records)


def sample_graphs(
    e_from: Vector,
    e_to: Vector,
    n_samples: int,
    burn_in: int,
    thin: int,
    *,
    swap_p: float = 0.5,
    weights: np.ndarray | None = None,
    z_from: Vector = (),
    z_to: Vector = (),
    seed: int | None = SEED_FROM_ENTROPY,
    allow_self_loops: bool = False,
) -> tuple[list[tuple[np.ndarray, np.ndarray]], SwapDiagnostics]:
    """Draw several graphs from a single chain.

    Runs ``burn_in`` steps, then records the edge list after every further
    ``thin`` steps until ``n_samples`` graphs are collected. Uses the
    weighted rule when ``weights`` is given, the uniform rule otherwise.
    Structural zeros need the weighted rule.

    Returns:
        (samples, diagnostics) where diagnostics covers all
        burn_in + n_samples * thin steps.
    """
    if n_samples < 1:
        raise ValueError(f"n_samples must be >= 1, got {n_samples}")
    if burn_in < 0 or thin < 1:
        raise ValueError(f"need burn_in >= 0 and thin >= 1, got {burn_in}, {thin}")
    _check_nonempty(e_from, burn_in + thin)

    if weights is None:
        if len(z_from) or len(z_to):
            raise ValueError(
                "structural zeros only apply to the weighted variant: pass weights"
            )
        chain = SwapChain(
            e_from, e_to, swap_p=swap_p, seed=seed, allow_self_loops=allow_self_loops
        )
    else:
        chain = SwapChain(
            e_from,
            e_to,
            weights=weights,
            forbidden=(z_from, z_to),
            seed=seed,
            allow_self_loops=allow_self_loops,
        )

    samples, diagnostics = collect_samples(chain, n_samples, burn_in, thin)
    log.info(
        "Collected %d samples (%s chain, burn_in=%d, thin=%d, acceptance %.3f)",
        n_samples,
        chain.variant,
        burn_in,
        thin,
        diagnostics.acceptance_rate(),
    )
    return samples, diagnostics
