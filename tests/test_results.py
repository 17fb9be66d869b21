"""Tests for result schema validation, writing and run IDs."""

import json
import re
from pathlib import Path

import numpy as np
import pytest

from degswap.config import ANCHOR_CONFIG, ChainConfig, RunConfig
from degswap.results import (
    generate_run_id,
    load_diagnostics,
    load_result,
    validate_result,
    write_result,
)
from degswap.swap import SwapChain, SwapDiagnostics


@pytest.fixture
def run_outputs():
    chain = SwapChain([1, 3, 0], [2, 4, 4], swap_p=0.5, seed=0)
    diagnostics = chain.run(500)
    return diagnostics, [chain.edges], chain.seed


class TestRunId:
    def test_format(self):
        run_id = generate_run_id(ANCHOR_CONFIG, 1000)
        assert re.fullmatch(r"uniform_m1000_n100000_s42_\d{8}_\d{6}", run_id)

    def test_weighted_entropy_seed(self):
        cfg = RunConfig(chain=ChainConfig(variant="weighted", n_steps=10), seed=-1)
        assert generate_run_id(cfg, 3).startswith("weighted_m3_n10_s-1_")


class TestValidateResult:
    def test_missing_fields(self):
        errors = validate_result({})
        assert any("Missing required" in e for e in errors)

    def test_accepted_exceeds_proposals(self):
        result = {
            "metrics": {
                "scalars": {
                    "n_steps": 10,
                    "n_proposals": 1,
                    "n_accepted": 2,
                    "acceptance_rate": 2.0,
                }
            }
        }
        assert any("exceeds" in e for e in validate_result(result))

    def test_bad_timestamp(self):
        assert any("ISO 8601" in e for e in validate_result({"timestamp": "yesterday"}))

    def test_metadata_needs_resolved_seed(self):
        assert any("resolved_seed" in e for e in validate_result({"metadata": {}}))


class TestWriteResult:
    def test_writes_all_files(self, tmp_path: Path, run_outputs):
        diagnostics, samples, seed = run_outputs
        out_dir = write_result(
            ANCHOR_CONFIG, diagnostics, samples, seed, results_dir=tmp_path
        )
        assert (out_dir / "result.json").exists()
        assert (out_dir / "edges.npz").exists()
        assert (out_dir / "diagnostics.npz").exists()

        result = load_result(out_dir / "result.json")
        assert result["metrics"]["scalars"]["n_steps"] == 500
        assert result["metadata"]["resolved_seed"] == seed
        assert result["config"]["chain"]["variant"] == "uniform"

    def test_diagnostics_round_trip(self, tmp_path: Path, run_outputs):
        diagnostics, samples, seed = run_outputs
        out_dir = write_result(
            ANCHOR_CONFIG, diagnostics, samples, seed, results_dir=tmp_path
        )
        loaded = load_diagnostics(out_dir)
        assert np.array_equal(loaded.did_swap, diagnostics.did_swap)
        assert np.array_equal(loaded.swap_p, diagnostics.swap_p)

    def test_multiple_samples_stored(self, tmp_path: Path):
        chain = SwapChain([1, 3, 0], [2, 4, 4], swap_p=0.5, seed=0)
        records, samples = [], []
        for _ in range(3):
            records.append(chain.run(100))
            samples.append(chain.edges)
        out_dir = write_result(
            ANCHOR_CONFIG,
            SwapDiagnostics.concatenate(records),
            samples,
            chain.seed,
            results_dir=tmp_path,
        )
        with np.load(out_dir / "edges.npz") as archive:
            assert {"e_from", "e_to", "e_from_0", "e_to_2"} <= set(archive.files)
            assert np.array_equal(archive["e_from"], samples[-1][0])

    def test_requires_a_sample(self, tmp_path: Path, run_outputs):
        diagnostics, _, seed = run_outputs
        with pytest.raises(ValueError):
            write_result(ANCHOR_CONFIG, diagnostics, [], seed, results_dir=tmp_path)

    def test_load_invalid_result(self, tmp_path: Path):
        path = tmp_path / "result.json"
        path.write_text(json.dumps({"run_id": "x"}))
        with pytest.raises(ValueError, match="validation failed"):
            load_result(path)
