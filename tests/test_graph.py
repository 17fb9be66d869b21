"""Tests for adjacency conversion, input validation and edge-list storage."""

from pathlib import Path

import numpy as np
import pytest
import scipy.sparse

from degswap.graph import (
    EdgeListData,
    InvalidGraphError,
    check_inputs,
    degree_sequences,
    edges_from_adjacency,
    edges_to_adjacency,
    load_edges,
    save_edges,
    validate_edge_list,
    validate_forbidden,
    validate_weights,
)


class TestConversion:
    def test_from_dense_row_major(self) -> None:
        adj = np.array([[0, 1, 1], [0, 0, 0], [1, 0, 0]])
        e_from, e_to = edges_from_adjacency(adj)
        assert e_from.tolist() == [0, 0, 2]
        assert e_to.tolist() == [1, 2, 0]
        assert e_from.dtype == np.int64

    def test_from_sparse_ignores_explicit_zeros(self) -> None:
        adj = scipy.sparse.csr_matrix(
            (np.array([1.0, 0.0, 2.0]), (np.array([0, 1, 2]), np.array([2, 0, 1]))),
            shape=(3, 3),
        )
        e_from, e_to = edges_from_adjacency(adj)
        assert list(zip(e_from.tolist(), e_to.tolist())) == [(0, 2), (2, 1)]

    def test_adjacency_round_trip_sums(self) -> None:
        rng = np.random.default_rng(0)
        dense = (rng.random((8, 8)) < 0.3).astype(int)
        e_from, e_to = edges_from_adjacency(dense)
        adj = edges_to_adjacency(e_from, e_to, 8)
        assert np.array_equal(adj.toarray(), dense)

    def test_degree_sequences_are_row_and_column_sums(self) -> None:
        dense = np.array([[0, 1, 1], [1, 0, 0], [0, 1, 0]])
        e_from, e_to = edges_from_adjacency(dense)
        out_deg, in_deg = degree_sequences(e_from, e_to, 4)
        assert out_deg.tolist() == [2, 1, 1, 0]
        assert in_deg.tolist() == [1, 2, 1, 0]


class TestValidation:
    def test_valid_graph(self) -> None:
        assert validate_edge_list(np.array([0, 1]), np.array([1, 2])) == []

    def test_duplicates(self) -> None:
        errors = validate_edge_list(np.array([0, 0, 1]), np.array([1, 1, 2]))
        assert any("Duplicate" in e for e in errors)

    def test_self_loops(self) -> None:
        errors = validate_edge_list(np.array([0, 2]), np.array([1, 2]))
        assert any("Self-loops" in e for e in errors)
        assert validate_edge_list(np.array([0, 2]), np.array([1, 2]), True) == []

    def test_shape_mismatch(self) -> None:
        errors = validate_edge_list(np.array([0, 1]), np.array([1]))
        assert len(errors) == 1

    def test_negative_ids(self) -> None:
        errors = validate_edge_list(np.array([-1]), np.array([2]))
        assert any("Negative" in e for e in errors)

    def test_forbidden_clash(self) -> None:
        errors = validate_forbidden(
            np.array([0, 1]), np.array([1, 2]), np.array([1, 5]), np.array([2, 6])
        )
        assert len(errors) == 1 and "(1,2)" in errors[0]
        assert validate_forbidden(
            np.array([0]), np.array([1]), np.array([1]), np.array([0])
        ) == []

    def test_weights(self) -> None:
        assert validate_weights(np.ones((3, 3)), 3) == []
        assert validate_weights(np.ones(3), 3)
        assert validate_weights(np.ones((2, 2)), 3)
        assert validate_weights(-np.ones((3, 3)), 3)
        bad = np.ones((3, 3))
        bad[0, 0] = np.nan
        assert validate_weights(bad, 3)

    def test_check_inputs_raises_with_all_errors(self) -> None:
        data = EdgeListData(
            e_from=np.array([0, 0, 2]),
            e_to=np.array([1, 1, 2]),
            weights=np.ones((2, 2)),
        )
        with pytest.raises(InvalidGraphError) as exc:
            check_inputs(data)
        message = str(exc.value)
        assert "Duplicate" in message
        assert "Self-loops" in message
        assert "does not cover" in message

    def test_check_inputs_passes(self) -> None:
        data = EdgeListData(
            e_from=np.array([0, 1]),
            e_to=np.array([1, 2]),
            weights=np.ones((3, 3)),
            z_from=np.array([2]),
            z_to=np.array([0]),
        )
        check_inputs(data)


class TestEdgeListData:
    def test_n_vertices(self) -> None:
        data = EdgeListData(e_from=np.array([0, 4]), e_to=np.array([1, 2]))
        assert data.n_edges == 2
        assert data.n_vertices == 5
        assert not data.has_structural_zeros

    def test_n_vertices_includes_weights_and_zeros(self) -> None:
        data = EdgeListData(
            e_from=np.array([0]),
            e_to=np.array([1]),
            weights=np.ones((3, 3)),
            z_from=np.array([6]),
            z_to=np.array([0]),
        )
        assert data.n_vertices == 7
        assert data.has_structural_zeros


class TestStorage:
    def test_save_load_round_trip(self, tmp_path: Path) -> None:
        data = EdgeListData(
            e_from=np.array([1, 3]),
            e_to=np.array([2, 4]),
            weights=np.full((5, 5), 0.5),
            z_from=np.array([1]),
            z_to=np.array([4]),
        )
        path = save_edges(tmp_path / "graphs" / "g.npz", data)
        loaded = load_edges(path)
        assert loaded.e_from.tolist() == [1, 3]
        assert loaded.e_to.tolist() == [2, 4]
        assert np.array_equal(loaded.weights, data.weights)
        assert loaded.z_from.tolist() == [1]
        assert loaded.z_to.dtype == np.int64

    def test_minimal_archive(self, tmp_path: Path) -> None:
        path = save_edges(
            tmp_path / "g.npz", EdgeListData(e_from=np.array([0]), e_to=np.array([1]))
        )
        loaded = load_edges(path)
        assert loaded.weights is None
        assert loaded.z_from is None

    def test_overrides_from_npy(self, tmp_path: Path) -> None:
        path = save_edges(
            tmp_path / "g.npz",
            EdgeListData(e_from=np.array([1, 3]), e_to=np.array([2, 4])),
        )
        np.save(tmp_path / "w.npy", np.ones((5, 5)))
        np.save(tmp_path / "z.npy", np.array([[1, 4], [3, 2]]))
        loaded = load_edges(path, tmp_path / "w.npy", tmp_path / "z.npy")
        assert loaded.weights.shape == (5, 5)
        assert loaded.z_from.tolist() == [1, 3]
        assert loaded.z_to.tolist() == [4, 2]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_edges(tmp_path / "absent.npz")
