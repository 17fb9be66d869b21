"""Run ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from degswap.config.experiment import RunConfig


def generate_run_id(config: RunConfig, n_edges: int) -> str:
    """Generate a scannable run ID from config parameters.

    Format: {variant}_m{m}_n{total_steps}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: weighted_m1000_n1000000_s42_20261018_143012

    An entropy-seeded run (seed -1) shows up as ``s-1``; its resolved seed
    lives in result.json metadata.
    """
    ts = datetime.now(timezone.utc)
    return (
        f"{config.chain.variant}"
        f"_m{n_edges}"
        f"_n{config.total_steps}"
        f"_s{config.seed}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )
