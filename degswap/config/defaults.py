"""Anchor configuration: single source of truth for default run parameters."""

from degswap.config.experiment import RunConfig

# All-default values: uniform variant, 100k steps, swap_p=0.5, seed=42,
# single sample read from edges.npz.
ANCHOR_CONFIG = RunConfig()
