#!/usr/bin/env python3
"""Entry point for running a degree-preserving swap chain.

Chains the run stages into a single command:
load inputs -> validate -> sample -> write results.

Usage:
    python run_sampler.py --config config.json
    python run_sampler.py --config config.json --dry-run
    python run_sampler.py --config config.json --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from degswap.config import RunConfig, full_config_hash, load_config

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(config: RunConfig, results_dir: str = "results") -> Path:
    """Execute one sampler run described by ``config``.

    Args:
        config: Parsed run configuration.
        results_dir: Base directory for results output.

    Returns:
        Path to the run's output directory.
    """
    # Lazy imports to keep --dry-run fast
    from degswap.graph import check_inputs, degree_sequences, load_edges
    from degswap.reproducibility import get_git_hash, resolve_seed
    from degswap.results import write_result
    from degswap.swap import SwapChain, collect_samples

    pipeline_start = time.monotonic()
    log.info("Git hash: %s", get_git_hash())

    # ── Stage 1: Inputs ────────────────────────────────────────────
    with stage_timer("Load Inputs"):
        data = load_edges(
            config.input.edges_path,
            weights_path=config.input.weights_path,
            zeros_path=config.input.zeros_path,
        )
        if config.chain.variant == "weighted" and data.weights is None:
            raise ValueError(
                "weighted variant needs a weight matrix: set input.weights_path "
                "or store 'weights' in the edges archive"
            )
        if config.chain.variant == "uniform" and data.has_structural_zeros:
            raise ValueError(
                "structural zeros only apply to the weighted variant: set "
                "chain.variant to 'weighted' or drop 'z_from'/'z_to' from the "
                "edges archive"
            )
        log.info(
            "Graph: m=%d, vertices=%d, structural zeros=%d",
            data.n_edges,
            data.n_vertices,
            0 if data.z_from is None else data.z_from.size,
        )

    with stage_timer("Validate Inputs"):
        check_inputs(data, allow_self_loops=config.chain.allow_self_loops)
        before = degree_sequences(data.e_from, data.e_to, data.n_vertices)

    # ── Stage 2: Sampling ──────────────────────────────────────────
    with stage_timer("Sampling"):
        seed = resolve_seed(config.seed)
        log.info("Seed: %d (configured %d)", seed, config.seed)
        if config.chain.variant == "weighted":
            forbidden = None
            if data.has_structural_zeros:
                forbidden = (data.z_from, data.z_to)
            chain = SwapChain(
                data.e_from,
                data.e_to,
                weights=data.weights,
                forbidden=forbidden,
                seed=seed,
                allow_self_loops=config.chain.allow_self_loops,
            )
        else:
            chain = SwapChain(
                data.e_from,
                data.e_to,
                swap_p=config.chain.swap_p,
                seed=seed,
                allow_self_loops=config.chain.allow_self_loops,
            )

        sampling = config.sampling
        if sampling.n_samples == 1 and sampling.burn_in == 0:
            diagnostics = chain.run(config.chain.n_steps)
            samples = [chain.edges]
        else:
            samples, diagnostics = collect_samples(
                chain, sampling.n_samples, sampling.burn_in, sampling.thin
            )

        e_from, e_to = samples[-1]
        after = degree_sequences(e_from, e_to, data.n_vertices)
        if not all((x == y).all() for x, y in zip(before, after)):
            raise RuntimeError("degree sequence changed during sampling")
        log.info(
            "Steps: %d, proposals: %d, accepted: %d (rate %.4f)",
            diagnostics.n_steps,
            diagnostics.n_proposals,
            diagnostics.n_accepted,
            diagnostics.acceptance_rate(),
        )

    # ── Stage 3: Results ───────────────────────────────────────────
    with stage_timer("Write Results"):
        output_dir = write_result(
            config,
            diagnostics,
            samples,
            resolved_seed=chain.seed,
            results_dir=results_dir,
        )
        log.info("Results written to %s", output_dir)

    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Run complete in {total_elapsed:.1f}s")
    print(f"  Run:        {output_dir.name}")
    print(f"  Output:     {output_dir}")
    print(f"  Accepted:   {diagnostics.n_accepted} / {diagnostics.n_steps} steps")
    print(f"{'=' * 60}")

    return output_dir


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Sample degree-preserving directed graphs by checkerboard swaps"
    )
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to run config JSON file",
    )
    parser.add_argument(
        "--results-dir",
        type=str,
        default="results",
        help="Base directory for run outputs",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the run plan without sampling",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)

    config = load_config(config_path)

    print(f"Config hash: {full_config_hash(config)}")
    print(f"Input:    edges={config.input.edges_path}, "
          f"weights={config.input.weights_path}, zeros={config.input.zeros_path}")
    print(f"Chain:    variant={config.chain.variant}, swap_p={config.chain.swap_p}, "
          f"allow_self_loops={config.chain.allow_self_loops}")
    print(f"Sampling: n_samples={config.sampling.n_samples}, "
          f"burn_in={config.sampling.burn_in}, thin={config.sampling.thin}")
    print(f"Steps:    {config.total_steps}")
    print(f"Seed:     {config.seed}")

    if args.dry_run:
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(config, results_dir=args.results_dir)
    except Exception:
        log.exception("Sampler run failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
