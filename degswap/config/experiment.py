"""Sampler run configuration dataclasses: all frozen and slotted for immutability."""

from dataclasses import dataclass, field

VARIANTS = ("uniform", "weighted")


@dataclass(frozen=True, slots=True)
class InputConfig:
    """Where the chain's inputs come from."""

    edges_path: str = "edges.npz"  # npz with e_from, e_to (+ optional weights, z_from, z_to)
    weights_path: str | None = None  # .npy weight matrix, overrides the archive's
    zeros_path: str | None = None  # .npy (z, 2) forbidden pairs, overrides the archive's


@dataclass(frozen=True, slots=True)
class ChainConfig:
    """Swap chain parameters."""

    variant: str = "uniform"  # "uniform" or "weighted"
    n_steps: int = 100_000  # swap attempts per run when n_samples == 1
    swap_p: float = 0.5  # base acceptance probability, uniform variant only
    allow_self_loops: bool = False

    def __post_init__(self) -> None:
        if self.variant not in VARIANTS:
            raise ValueError(f"variant must be one of {VARIANTS}, got {self.variant!r}")
        if self.n_steps < 0:
            raise ValueError(f"n_steps must be >= 0, got {self.n_steps}")
        if not 0.0 < self.swap_p < 1.0:
            raise ValueError(
                f"swap_p must lie in (0, 1) for aperiodicity, got {self.swap_p}"
            )


@dataclass(frozen=True, slots=True)
class SamplingConfig:
    """Multi-sample collection from a single chain."""

    n_samples: int = 1
    burn_in: int = 0  # steps discarded before the first sample
    thin: int = 1000  # steps between consecutive samples

    def __post_init__(self) -> None:
        if self.n_samples < 1:
            raise ValueError(f"n_samples must be >= 1, got {self.n_samples}")
        if self.burn_in < 0:
            raise ValueError(f"burn_in must be >= 0, got {self.burn_in}")
        if self.thin < 1:
            raise ValueError(f"thin must be >= 1, got {self.thin}")


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Top-level run configuration composing all sub-configs.

    ``seed = -1`` requests OS entropy; the resolved value is recorded in
    the run's result.json so the chain can be replayed.
    """

    input: InputConfig = field(default_factory=InputConfig)
    chain: ChainConfig = field(default_factory=ChainConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Cross-parameter validation."""
        if self.seed < -1:
            raise ValueError(f"seed must be >= -1, got {self.seed}")
        if self.chain.variant == "uniform" and (
            self.input.weights_path is not None or self.input.zeros_path is not None
        ):
            raise ValueError(
                "weights_path and zeros_path only apply to the weighted variant"
            )

    @property
    def total_steps(self) -> int:
        """Swap attempts the run will make."""
        if self.sampling.n_samples == 1 and self.sampling.burn_in == 0:
            return self.chain.n_steps
        return self.sampling.burn_in + self.sampling.n_samples * self.sampling.thin
