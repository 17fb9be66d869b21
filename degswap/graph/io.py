"""Edge-list storage as compressed ``.npz`` archives.

An archive holds ``e_from`` and ``e_to`` and, when present, ``weights``,
``z_from`` and ``z_to``. Separate ``.npy`` files can supply the weight
matrix or structural zeros for an archive that lacks them.
"""

import logging
from pathlib import Path

import numpy as np

from degswap.graph.types import EdgeListData

log = logging.getLogger(__name__)

_OPTIONAL_KEYS = ("weights", "z_from", "z_to")


def save_edges(path: str | Path, data: EdgeListData) -> Path:
    """Write an EdgeListData to a compressed npz archive.

    Returns:
        Path of the written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    arrays = {
        "e_from": np.asarray(data.e_from, dtype=np.int64),
        "e_to": np.asarray(data.e_to, dtype=np.int64),
    }
    for key in _OPTIONAL_KEYS:
        value = getattr(data, key)
        if value is not None:
            arrays[key] = np.asarray(value)
    with open(path, "wb") as f:
        np.savez_compressed(f, **arrays)
    log.info("Edge list (%d edges) saved to %s", data.n_edges, path)
    return path


def load_edges(
    path: str | Path,
    weights_path: str | Path | None = None,
    zeros_path: str | Path | None = None,
) -> EdgeListData:
    """Load an edge list, optionally overriding weights and structural zeros.

    Args:
        path: npz archive with at least ``e_from`` and ``e_to``.
        weights_path: ``.npy`` file holding a 2-D weight matrix.
        zeros_path: ``.npy`` file holding a (z, 2) array of forbidden pairs.

    Returns:
        EdgeListData with int64 vertex vectors.

    Raises:
        FileNotFoundError: If any given path does not exist.
        KeyError: If the archive lacks ``e_from`` or ``e_to``.
    """
    with np.load(Path(path)) as archive:
        fields = {
            "e_from": archive["e_from"].astype(np.int64),
            "e_to": archive["e_to"].astype(np.int64),
        }
        for key in _OPTIONAL_KEYS:
            if key in archive.files:
                fields[key] = archive[key]

    if weights_path is not None:
        fields["weights"] = np.load(Path(weights_path)).astype(np.float64)
    if zeros_path is not None:
        zeros = np.load(Path(zeros_path)).astype(np.int64).reshape(-1, 2)
        fields["z_from"] = zeros[:, 0]
        fields["z_to"] = zeros[:, 1]
    for key in ("z_from", "z_to"):
        if key in fields:
            fields[key] = fields[key].astype(np.int64)

    data = EdgeListData(**fields)
    log.info("Edge list loaded from %s: %d edges", path, data.n_edges)
    return data
