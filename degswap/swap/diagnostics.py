"""Per-step outcome codes and the diagnostic record returned by a chain run."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import numpy as np

COLUMNS = (
    "same_edge",
    "is_checkerboard",
    "is_not_struct_zeros",
    "can_swap",
    "swap_p",
    "did_swap",
)


class StepOutcome(IntEnum):
    """Path a single swap attempt took through the chain.

    SAME_EDGE: Both sampled indices coincided.
    NOT_CHECKERBOARD: A completion edge already exists (or would be a
        disallowed self-loop).
    STRUCTURAL_ZERO: A completion edge is a forbidden position.
    REJECTED: Acceptance was evaluated and the Bernoulli draw failed.
    ACCEPTED: The edge list was rewired.
    """

    SAME_EDGE = 0
    NOT_CHECKERBOARD = 1
    STRUCTURAL_ZERO = 2
    REJECTED = 3
    ACCEPTED = 4


@dataclass(frozen=True)
class SwapDiagnostics:
    """Six parallel columns, one row per attempted step.

    ``is_checkerboard`` and ``is_not_struct_zeros`` are False only on rows
    where that test ran and failed, so exactly one of same_edge,
    ~is_checkerboard, ~is_not_struct_zeros, can_swap holds on every row.
    ``swap_p`` is 0.0 wherever can_swap is False. Uses frozen=True but
    omits slots=True since numpy arrays don't interact well with __slots__.
    """

    same_edge: np.ndarray  # bool (n,)
    is_checkerboard: np.ndarray  # bool (n,)
    is_not_struct_zeros: np.ndarray  # bool (n,)
    can_swap: np.ndarray  # bool (n,)
    swap_p: np.ndarray  # float64 (n,), unclamped, may be inf or NaN
    did_swap: np.ndarray  # bool (n,)

    @classmethod
    def from_outcomes(
        cls, outcomes: np.ndarray, swap_p: np.ndarray
    ) -> "SwapDiagnostics":
        """Expand an array of StepOutcome codes into the six columns."""
        codes = np.asarray(outcomes, dtype=np.int8)
        return cls(
            same_edge=codes == StepOutcome.SAME_EDGE,
            is_checkerboard=codes != StepOutcome.NOT_CHECKERBOARD,
            is_not_struct_zeros=codes != StepOutcome.STRUCTURAL_ZERO,
            can_swap=codes >= StepOutcome.REJECTED,
            swap_p=np.asarray(swap_p, dtype=np.float64),
            did_swap=codes == StepOutcome.ACCEPTED,
        )

    @classmethod
    def empty(cls) -> "SwapDiagnostics":
        return cls.from_outcomes(np.zeros(0, dtype=np.int8), np.zeros(0))

    @classmethod
    def concatenate(cls, parts: list["SwapDiagnostics"]) -> "SwapDiagnostics":
        """Join the records of consecutive runs of the same chain."""
        if not parts:
            return cls.empty()
        return cls(
            **{
                name: np.concatenate([getattr(p, name) for p in parts])
                for name in COLUMNS
            }
        )

    def __len__(self) -> int:
        return int(self.same_edge.shape[0])

    @property
    def n_steps(self) -> int:
        return len(self)

    @property
    def n_proposals(self) -> int:
        """Steps that passed every structural test."""
        return int(self.can_swap.sum())

    @property
    def n_accepted(self) -> int:
        return int(self.did_swap.sum())

    def outcomes(self) -> np.ndarray:
        """Collapse the columns back to StepOutcome codes (int8)."""
        codes = np.full(len(self), StepOutcome.REJECTED, dtype=np.int8)
        codes[self.same_edge] = StepOutcome.SAME_EDGE
        codes[~self.is_checkerboard] = StepOutcome.NOT_CHECKERBOARD
        codes[~self.is_not_struct_zeros] = StepOutcome.STRUCTURAL_ZERO
        codes[self.did_swap] = StepOutcome.ACCEPTED
        return codes

    def acceptance_rate(self) -> float:
        """Accepted swaps over evaluated proposals (0.0 if none evaluated)."""
        n = self.n_proposals
        if n == 0:
            return 0.0
        return self.n_accepted / n

    def rejection_counts(self) -> dict[str, int]:
        return {
            "same_edge": int(self.same_edge.sum()),
            "not_checkerboard": int((~self.is_checkerboard).sum()),
            "structural_zero": int((~self.is_not_struct_zeros).sum()),
            "bernoulli": int((self.can_swap & ~self.did_swap).sum()),
        }

    def summary(self) -> dict[str, Any]:
        """JSON-safe scalar summary of the run."""
        finite = self.swap_p[self.can_swap & np.isfinite(self.swap_p)]
        return {
            "n_steps": self.n_steps,
            "n_proposals": self.n_proposals,
            "n_accepted": self.n_accepted,
            "acceptance_rate": self.acceptance_rate(),
            "swap_rate": self.n_accepted / self.n_steps if self.n_steps else 0.0,
            "rejections": self.rejection_counts(),
            "n_degenerate_ratios": int(
                (self.can_swap & np.isnan(self.swap_p)).sum()
            ),
            "mean_finite_swap_p": float(finite.mean()) if finite.size else 0.0,
        }

    def to_dict(self) -> dict[str, np.ndarray]:
        return {name: getattr(self, name) for name in COLUMNS}
