"""End-to-end tests for the run_sampler command-line pipeline."""

import json
import sys
from pathlib import Path

import numpy as np
import pytest

from degswap.config import (
    ChainConfig,
    InputConfig,
    RunConfig,
    SamplingConfig,
    config_to_json,
)
from degswap.graph import EdgeListData, InvalidGraphError, degree_sequences, save_edges
from degswap.results import load_diagnostics, load_result
from run_sampler import main, run_pipeline


@pytest.fixture
def edges_file(tmp_path: Path) -> Path:
    rng = np.random.default_rng(0)
    cells = rng.choice([c for c in range(400) if c // 20 != c % 20], size=60, replace=False)
    data = EdgeListData(
        e_from=cells // 20,
        e_to=cells % 20,
        weights=rng.uniform(0.5, 2.0, size=(20, 20)),
    )
    return save_edges(tmp_path / "edges.npz", data)


class TestRunPipeline:
    def test_uniform_run(self, tmp_path: Path, edges_file: Path):
        cfg = RunConfig(
            input=InputConfig(edges_path=str(edges_file)),
            chain=ChainConfig(n_steps=5_000),
            seed=3,
        )
        out_dir = run_pipeline(cfg, results_dir=str(tmp_path / "results"))
        result = load_result(out_dir / "result.json")
        assert result["metrics"]["scalars"]["n_steps"] == 5_000
        assert result["metadata"]["resolved_seed"] == 3

        with np.load(edges_file) as original, np.load(out_dir / "edges.npz") as final:
            before = degree_sequences(original["e_from"], original["e_to"], 20)
            after = degree_sequences(final["e_from"], final["e_to"], 20)
        assert np.array_equal(before[0], after[0])
        assert np.array_equal(before[1], after[1])

    def test_weighted_sampling_run(self, tmp_path: Path, edges_file: Path):
        np.save(tmp_path / "zeros.npy", np.array([[0, 0], [1, 1]]))
        cfg = RunConfig(
            input=InputConfig(
                edges_path=str(edges_file), zeros_path=str(tmp_path / "zeros.npy")
            ),
            chain=ChainConfig(variant="weighted"),
            sampling=SamplingConfig(n_samples=3, burn_in=500, thin=100),
            seed=-1,
        )
        out_dir = run_pipeline(cfg, results_dir=str(tmp_path / "results"))
        diagnostics = load_diagnostics(out_dir)
        assert len(diagnostics) == 800
        result = load_result(out_dir / "result.json")
        assert result["metadata"]["n_samples"] == 3
        assert result["metadata"]["resolved_seed"] >= 0

    def test_weighted_without_weights_fails(self, tmp_path: Path):
        path = save_edges(
            tmp_path / "plain.npz",
            EdgeListData(e_from=np.array([1, 3]), e_to=np.array([2, 4])),
        )
        cfg = RunConfig(
            input=InputConfig(edges_path=str(path)),
            chain=ChainConfig(variant="weighted", n_steps=10),
        )
        with pytest.raises(ValueError, match="weight matrix"):
            run_pipeline(cfg, results_dir=str(tmp_path / "results"))

    def test_uniform_with_archived_zeros_fails(self, tmp_path: Path):
        path = save_edges(
            tmp_path / "zeros.npz",
            EdgeListData(
                e_from=np.array([1, 3]),
                e_to=np.array([2, 4]),
                z_from=np.array([1]),
                z_to=np.array([4]),
            ),
        )
        cfg = RunConfig(
            input=InputConfig(edges_path=str(path)), chain=ChainConfig(n_steps=200)
        )
        with pytest.raises(ValueError, match="weighted variant"):
            run_pipeline(cfg, results_dir=str(tmp_path / "results"))
        assert not (tmp_path / "results").exists()

    def test_weighted_run_honours_archived_zeros(self, tmp_path: Path):
        path = save_edges(
            tmp_path / "zeros.npz",
            EdgeListData(
                e_from=np.array([1, 3]),
                e_to=np.array([2, 4]),
                weights=np.ones((5, 5)),
                z_from=np.array([1]),
                z_to=np.array([4]),
            ),
        )
        cfg = RunConfig(
            input=InputConfig(edges_path=str(path)),
            chain=ChainConfig(variant="weighted", n_steps=200),
            seed=0,
        )
        out_dir = run_pipeline(cfg, results_dir=str(tmp_path / "results"))
        with np.load(out_dir / "edges.npz") as final:
            edges = set(zip(final["e_from"].tolist(), final["e_to"].tolist()))
        assert edges == {(1, 2), (3, 4)}

    def test_invalid_graph_rejected(self, tmp_path: Path):
        path = save_edges(
            tmp_path / "dup.npz",
            EdgeListData(e_from=np.array([1, 1]), e_to=np.array([2, 2])),
        )
        cfg = RunConfig(input=InputConfig(edges_path=str(path)), chain=ChainConfig(n_steps=10))
        with pytest.raises(InvalidGraphError):
            run_pipeline(cfg, results_dir=str(tmp_path / "results"))


class TestMain:
    def test_dry_run(self, tmp_path: Path, edges_file: Path, monkeypatch, capsys):
        cfg_path = tmp_path / "cfg.json"
        cfg_path.write_text(
            config_to_json(RunConfig(input=InputConfig(edges_path=str(edges_file))))
        )
        monkeypatch.setattr(sys, "argv", ["run_sampler.py", "--config", str(cfg_path), "--dry-run"])
        main()
        out = capsys.readouterr().out
        assert "[dry-run]" in out
        assert not (tmp_path / "results").exists()

    def test_missing_config_exits(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(
            sys, "argv", ["run_sampler.py", "--config", str(tmp_path / "nope.json")]
        )
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1

    def test_full_run(self, tmp_path: Path, edges_file: Path, monkeypatch):
        cfg_path = tmp_path / "cfg.json"
        cfg = json.loads(config_to_json(RunConfig(input=InputConfig(edges_path=str(edges_file)))))
        cfg["chain"]["n_steps"] = 1_000
        cfg_path.write_text(json.dumps(cfg))
        results = tmp_path / "results"
        monkeypatch.setattr(
            sys,
            "argv",
            ["run_sampler.py", "--config", str(cfg_path), "--results-dir", str(results)],
        )
        main()
        runs = list(results.iterdir())
        assert len(runs) == 1
        assert (runs[0] / "result.json").exists()
