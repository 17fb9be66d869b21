"""Checkerboard-swap Markov chain over simple directed graphs.

One chain owns the positional edge list, an EdgeIndex kept in step with
it, and its own numpy Generator. Each step samples two edge slots i, j
and proposes rewiring (a,b),(c,d) -> (a,d),(c,b). The proposal is
discarded when i == j, when a completion edge already exists, or when a
completion edge is a structural zero; otherwise it is accepted with
probability ``swap_p`` (uniform variant) or the weight ratio
W(a,d)W(c,b) / W(a,b)W(c,d) (weighted variant).

Both variants preserve every in- and out-degree, since slot i keeps its
head b and slot j keeps its head d while the tails trade places.
"""

import logging
from collections.abc import Sequence

import numpy as np

from degswap.reproducibility.seed import make_rng
from degswap.swap.diagnostics import StepOutcome, SwapDiagnostics
from degswap.swap.index import EdgeIndex, ForbiddenIndex
from degswap.swap.weights import WeightTable, acceptance_ratio

log = logging.getLogger(__name__)

# Number of (i, j, u) triples drawn from the Generator at a time. The
# proposal stream depends only on the seed and m, never on how a run is
# split into calls.
DRAW_BLOCK = 65_536

_SAME_EDGE = int(StepOutcome.SAME_EDGE)
_NOT_CHECKERBOARD = int(StepOutcome.NOT_CHECKERBOARD)
_STRUCTURAL_ZERO = int(StepOutcome.STRUCTURAL_ZERO)
_REJECTED = int(StepOutcome.REJECTED)
_ACCEPTED = int(StepOutcome.ACCEPTED)


def _as_vertex_vector(values: Sequence[int] | np.ndarray, name: str) -> list[int]:
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {arr.shape}")
    return [int(v) for v in arr.tolist()]


class SwapChain:
    """Degree-preserving swap chain on a simple directed graph.

    Exactly one of ``swap_p`` and ``weights`` selects the variant:

    - ``swap_p`` in (0, 1): uniform sampler. Every valid checkerboard is
      accepted with the same probability; p < 1 keeps the chain aperiodic.
    - ``weights``: weighted sampler whose stationary law is proportional
      to the product of edge weights. ``forbidden`` positions are never
      created.

    The edge list and index are private; the only way to mutate them is
    through :meth:`step` and :meth:`run`, which update both together.

    Args:
        e_from: Tail vertex of each edge.
        e_to: Head vertex of each edge.
        swap_p: Base acceptance probability (uniform variant).
        weights: Weight table or 2-D array (weighted variant).
        forbidden: Structural zeros, as a ForbiddenIndex or a pair of
            parallel (z_from, z_to) sequences.
        seed: Generator seed; None or -1 draws OS entropy.
        allow_self_loops: If False, a completion edge (v, v) fails the
            checkerboard test, so no self-loop is ever created.
    """

    def __init__(
        self,
        e_from: Sequence[int] | np.ndarray,
        e_to: Sequence[int] | np.ndarray,
        *,
        swap_p: float | None = None,
        weights: WeightTable | np.ndarray | None = None,
        forbidden: ForbiddenIndex | tuple[Sequence[int], Sequence[int]] | None = None,
        seed: int | None = None,
        allow_self_loops: bool = False,
    ) -> None:
        self._from = _as_vertex_vector(e_from, "e_from")
        self._to = _as_vertex_vector(e_to, "e_to")
        if len(self._from) != len(self._to):
            raise ValueError(
                f"e_from and e_to must have equal length, got "
                f"{len(self._from)} and {len(self._to)}"
            )

        if (swap_p is None) == (weights is None):
            raise ValueError("pass exactly one of swap_p and weights")
        if weights is not None and not isinstance(weights, WeightTable):
            weights = WeightTable(weights)
        if forbidden is not None and not isinstance(forbidden, ForbiddenIndex):
            z_from, z_to = forbidden
            if len(z_from) != len(z_to):
                raise ValueError(
                    f"z_from and z_to must have equal length, got "
                    f"{len(z_from)} and {len(z_to)}"
                )
            forbidden = ForbiddenIndex(z_from, z_to)
        if forbidden is not None and weights is None:
            raise ValueError("structural zeros require the weighted variant")

        self._swap_p = None if swap_p is None else float(swap_p)
        self._weights = weights
        self._forbidden = forbidden if forbidden else None
        self._allow_self_loops = allow_self_loops
        self._index = EdgeIndex(self._from, self._to)
        if len(self._index) != len(self._from):
            log.warning(
                "Edge list has %d duplicate edges; input is not a simple graph",
                len(self._from) - len(self._index),
            )

        self._rng, self.seed = make_rng(seed)
        self._buf_i: list[int] = []
        self._buf_j: list[int] = []
        self._buf_u: list[float] = []
        self._pos = 0
        self.steps_taken = 0

        log.debug(
            "SwapChain: m=%d, variant=%s, forbidden=%d, seed=%d",
            len(self._from),
            self.variant,
            len(self._forbidden) if self._forbidden else 0,
            self.seed,
        )

    @property
    def variant(self) -> str:
        return "uniform" if self._weights is None else "weighted"

    @property
    def n_edges(self) -> int:
        return len(self._from)

    @property
    def edges(self) -> tuple[np.ndarray, np.ndarray]:
        """Copy of the current edge list as (e_from, e_to) int64 arrays."""
        return (
            np.array(self._from, dtype=np.int64),
            np.array(self._to, dtype=np.int64),
        )

    def has_edge(self, u: int, v: int) -> bool:
        return self._index.contains(u, v)

    def is_consistent(self) -> bool:
        """True if the index holds exactly the edges in the edge list."""
        if len(self._index) != len(self._from):
            return False
        return all(self._index.contains(u, v) for u, v in zip(self._from, self._to))

    def _refill(self) -> None:
        m = len(self._from)
        if m == 0:
            raise ValueError("cannot swap on an empty edge list")
        pairs = self._rng.integers(0, m, size=(DRAW_BLOCK, 2))
        self._buf_i = pairs[:, 0].tolist()
        self._buf_j = pairs[:, 1].tolist()
        self._buf_u = self._rng.random(DRAW_BLOCK).tolist()
        self._pos = 0

    def _draw(self) -> tuple[int, int, float]:
        if self._pos == len(self._buf_i):
            self._refill()
        k = self._pos
        self._pos = k + 1
        return self._buf_i[k], self._buf_j[k], self._buf_u[k]

    def _attempt(self, i: int, j: int, u: float) -> tuple[int, float]:
        """Evaluate one proposal and commit it if accepted.

        Returns:
            (StepOutcome code, acceptance probability or 0.0 if not evaluated).
        """
        if i == j:
            return _SAME_EDGE, 0.0

        frm = self._from
        to = self._to
        a, b = frm[i], to[i]
        c, d = frm[j], to[j]

        index = self._index
        if index.contains(a, d) or index.contains(c, b):
            return _NOT_CHECKERBOARD, 0.0
        if not self._allow_self_loops and (a == d or c == b):
            return _NOT_CHECKERBOARD, 0.0

        forbidden = self._forbidden
        if forbidden is not None and (
            forbidden.contains(a, d) or forbidden.contains(c, b)
        ):
            return _STRUCTURAL_ZERO, 0.0

        if self._weights is None:
            p = self._swap_p
        else:
            p = acceptance_ratio(self._weights, a, b, c, d)
            if p != p:
                log.debug(
                    "Degenerate 0/0 ratio for (%d,%d),(%d,%d); rejecting",
                    a, b, c, d,
                )

        # NaN compares False, so 0/0 ratios always reject.
        if not u < p:
            return _REJECTED, p

        index.erase(a, b)
        index.erase(c, d)
        index.insert(a, d)
        index.insert(c, b)
        # Heads stay in place; trading tails turns slot i into (c,b), slot j into (a,d).
        frm[i] = c
        frm[j] = a
        return _ACCEPTED, p

    def step(self) -> StepOutcome:
        """Attempt a single swap."""
        code, _ = self._attempt(*self._draw())
        self.steps_taken += 1
        return StepOutcome(code)

    def run(self, n_steps: int) -> SwapDiagnostics:
        """Attempt ``n_steps`` swaps and return one diagnostic row per step.

        Args:
            n_steps: Number of swap attempts (>= 0).

        Returns:
            SwapDiagnostics with exactly n_steps rows.
        """
        if n_steps < 0:
            raise ValueError(f"n_steps must be >= 0, got {n_steps}")
        outcomes = np.zeros(n_steps, dtype=np.int8)
        swap_ps = np.zeros(n_steps, dtype=np.float64)

        attempt = self._attempt
        draw = self._draw
        for k in range(n_steps):
            code, p = attempt(*draw())
            outcomes[k] = code
            if code >= _REJECTED:
                swap_ps[k] = p
        self.steps_taken += n_steps

        diagnostics = SwapDiagnostics.from_outcomes(outcomes, swap_ps)
        log.debug(
            "Ran %d steps: %d proposals, %d accepted",
            n_steps,
            diagnostics.n_proposals,
            diagnostics.n_accepted,
        )
        return diagnostics
