"""Per-chain seed management.

Every chain owns its own numpy Generator. Nothing here touches the global
``random`` or ``np.random`` state, so independent chains never share RNG
state.
"""

import logging

import numpy as np

log = logging.getLogger(__name__)

# Seed value that requests fresh entropy from the operating system.
SEED_FROM_ENTROPY = -1


def resolve_seed(seed: int | None) -> int:
    """Turn a user-facing seed into a concrete non-negative integer.

    ``None`` and ``SEED_FROM_ENTROPY`` draw 128 bits of OS entropy through
    ``np.random.SeedSequence``. The returned value can be fed back in to
    replay the same chain.

    Args:
        seed: Explicit seed, None, or the entropy sentinel.

    Returns:
        Non-negative integer seed.

    Raises:
        ValueError: If seed is negative and not the sentinel.
    """
    if seed is None or seed == SEED_FROM_ENTROPY:
        resolved = int(np.random.SeedSequence().entropy)
        log.debug("Seed drawn from OS entropy: %d", resolved)
        return resolved
    seed = int(seed)
    if seed < 0:
        raise ValueError(
            f"seed must be non-negative or {SEED_FROM_ENTROPY}, got {seed}"
        )
    return seed


def make_rng(seed: int | None) -> tuple[np.random.Generator, int]:
    """Build an independent Generator for one chain.

    Args:
        seed: Explicit seed, None, or the entropy sentinel.

    Returns:
        (generator, resolved_seed) tuple.
    """
    resolved = resolve_seed(seed)
    return np.random.default_rng(resolved), resolved
