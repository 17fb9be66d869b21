"""Edge-list container handed to and returned from the swap chain."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class EdgeListData:
    """Immutable container for a directed edge list and its sampling inputs.

    Holds the parallel tail/head vectors, plus the optional weight matrix
    and structural-zero vectors used by the weighted sampler. Uses
    frozen=True but omits slots=True since numpy arrays don't interact
    well with __slots__.
    """

    e_from: np.ndarray  # int64 (m,), tail of each edge
    e_to: np.ndarray  # int64 (m,), head of each edge
    weights: np.ndarray | None = None  # float64 (V, V), indexed by vertex id
    z_from: np.ndarray | None = None  # int64 (z,), tail of each structural zero
    z_to: np.ndarray | None = None  # int64 (z,), head of each structural zero

    @property
    def n_edges(self) -> int:
        return int(self.e_from.shape[0])

    @property
    def n_vertices(self) -> int:
        """One past the largest vertex id seen in edges, zeros or weights."""
        ids = [self.e_from, self.e_to]
        if self.z_from is not None:
            ids.extend([self.z_from, self.z_to])
        top = max((int(a.max()) + 1 for a in ids if a is not None and a.size), default=0)
        if self.weights is not None:
            top = max(top, *self.weights.shape)
        return top

    @property
    def has_structural_zeros(self) -> bool:
        return self.z_from is not None and self.z_from.size > 0
