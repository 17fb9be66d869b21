"""Result schema validation and writing for sampler runs.

Uses a Python validation function (not jsonschema) to check required
fields and types before writing result.json. Per-step diagnostics and
sampled edge lists go to npz files beside it.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from degswap.config.experiment import RunConfig
from degswap.config.hashing import chain_config_hash, full_config_hash
from degswap.reproducibility.git_hash import get_git_hash
from degswap.results.run_id import generate_run_id
from degswap.swap.diagnostics import SwapDiagnostics

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "run_id",
    "timestamp",
    "description",
    "tags",
    "config",
    "metrics",
    "metadata",
}

REQUIRED_SCALARS = {"n_steps", "n_proposals", "n_accepted", "acceptance_rate"}


def validate_result(result: dict[str, Any]) -> list[str]:
    """Validate a result dict against the run schema.

    Returns a list of error strings. An empty list means the result is valid.
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in result and not isinstance(result["schema_version"], str):
        errors.append("schema_version must be a string")
    if "tags" in result and not isinstance(result["tags"], list):
        errors.append("tags must be a list")
    if "config" in result and not isinstance(result["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in result:
        ts = result["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    metrics = result.get("metrics")
    if metrics is not None:
        if not isinstance(metrics, dict) or not isinstance(metrics.get("scalars"), dict):
            errors.append("metrics.scalars is required and must be a dict")
        else:
            scalars = metrics["scalars"]
            absent = REQUIRED_SCALARS - set(scalars)
            if absent:
                errors.append(f"metrics.scalars missing fields: {sorted(absent)}")
            elif scalars["n_accepted"] > scalars["n_proposals"]:
                errors.append("metrics.scalars.n_accepted exceeds n_proposals")

    metadata = result.get("metadata")
    if metadata is not None:
        if not isinstance(metadata, dict):
            errors.append("metadata must be a dict")
        elif "resolved_seed" not in metadata:
            errors.append("metadata.resolved_seed is required")

    return errors


def write_result(
    config: RunConfig,
    diagnostics: SwapDiagnostics,
    samples: list[tuple[np.ndarray, np.ndarray]],
    resolved_seed: int,
    metadata: dict[str, Any] | None = None,
    results_dir: str | Path = "results",
) -> Path:
    """Write result.json, edges.npz and diagnostics.npz for one run.

    Creates results/{run_id}/. ``edges.npz`` holds the final edge list
    as ``e_from``/``e_to``; with several samples, sample k is also stored
    as ``e_from_{k}``/``e_to_{k}``.

    Args:
        config: The run configuration.
        diagnostics: Concatenated per-step record of the whole run.
        samples: Sampled (e_from, e_to) pairs, final graph last.
        resolved_seed: Seed actually used by the chain.
        metadata: Optional extra metadata merged into the metadata block.
        results_dir: Base directory for result output.

    Returns:
        Path to the run directory.

    Raises:
        ValueError: If the assembled result fails validation.
    """
    if not samples:
        raise ValueError("at least one sampled edge list is required")
    n_edges = int(samples[-1][0].shape[0])
    run_id = generate_run_id(config, n_edges)
    out_dir = Path(results_dir) / run_id
    out_dir.mkdir(parents=True, exist_ok=True)

    result = {
        "schema_version": SCHEMA_VERSION,
        "run_id": run_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "metrics": {"scalars": diagnostics.summary()},
        "metadata": {
            "code_hash": get_git_hash(),
            "config_hash": full_config_hash(config),
            "chain_config_hash": chain_config_hash(config),
            "resolved_seed": int(resolved_seed),
            "n_edges": n_edges,
            "n_samples": len(samples),
            **(metadata or {}),
        },
    }

    errors = validate_result(result)
    if errors:
        raise ValueError(
            "Result validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    with open(out_dir / "result.json", "w") as f:
        json.dump(result, f, indent=2)

    edges: dict[str, np.ndarray] = {"e_from": samples[-1][0], "e_to": samples[-1][1]}
    if len(samples) > 1:
        for k, (e_from, e_to) in enumerate(samples):
            edges[f"e_from_{k}"] = e_from
            edges[f"e_to_{k}"] = e_to
    np.savez_compressed(str(out_dir / "edges.npz"), **edges)
    np.savez_compressed(str(out_dir / "diagnostics.npz"), **diagnostics.to_dict())

    return out_dir


def load_result(result_path: str | Path) -> dict[str, Any]:
    """Load and validate a result.json file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the loaded result fails validation.
    """
    path = Path(result_path)
    with open(path) as f:
        result = json.load(f)

    errors = validate_result(result)
    if errors:
        raise ValueError(
            f"Result validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return result


def load_diagnostics(run_dir: str | Path) -> SwapDiagnostics:
    """Read diagnostics.npz from a run directory."""
    with np.load(Path(run_dir) / "diagnostics.npz") as archive:
        return SwapDiagnostics(**{name: archive[name] for name in archive.files})
