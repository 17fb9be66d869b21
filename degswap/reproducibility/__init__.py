"""Reproducibility infrastructure: seed resolution and code provenance tracking."""

from degswap.reproducibility.seed import SEED_FROM_ENTROPY, make_rng, resolve_seed
from degswap.reproducibility.git_hash import get_git_hash

__all__ = [
    "SEED_FROM_ENTROPY",
    "make_rng",
    "resolve_seed",
    "get_git_hash",
]
