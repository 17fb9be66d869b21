"""Dense edge-weight lookup and the Metropolis-Hastings swap ratio."""

import math

import numpy as np


class WeightTable:
    """Read-only 2-D table giving the weight of every ordered pair (u, v).

    Rows are indexed by the tail vertex, columns by the head vertex. The
    table must be large enough to cover every vertex id the chain sees;
    out-of-range lookups raise IndexError from numpy.
    """

    __slots__ = ("_w",)

    def __init__(self, weights: np.ndarray) -> None:
        w = np.array(weights, dtype=np.float64)
        if w.ndim != 2:
            raise ValueError(
                f"weight matrix must be 2-D, got shape {w.shape}"
            )
        w.setflags(write=False)
        self._w = w

    @classmethod
    def uniform(cls, n_vertices: int) -> "WeightTable":
        """All-ones table: the weighted chain then targets the uniform law."""
        return cls(np.ones((n_vertices, n_vertices), dtype=np.float64))

    @property
    def shape(self) -> tuple[int, int]:
        return self._w.shape

    @property
    def array(self) -> np.ndarray:
        """The underlying read-only float64 array."""
        return self._w

    def weight(self, u: int, v: int) -> float:
        return float(self._w[u, v])


def acceptance_ratio(weights: WeightTable, a: int, b: int, c: int, d: int) -> float:
    """Ratio W(a,d)W(c,b) / W(a,b)W(c,d) for rewiring (a,b),(c,d) -> (a,d),(c,b).

    The value is not clamped to 1. A zero denominator gives ``inf`` when
    the numerator is positive (certain acceptance) and NaN for 0/0, which
    compares False against any uniform draw and so always rejects.
    """
    pre = weights.weight(a, b) * weights.weight(c, d)
    post = weights.weight(a, d) * weights.weight(c, b)
    if pre == 0.0:
        return math.inf if post > 0.0 else math.nan
    return post / pre
