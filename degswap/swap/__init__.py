"""Checkerboard-swap chain: membership indices, weights, diagnostics, entry points."""

from degswap.swap.api import collect_samples, sample_graphs, simple_swap_n, swap_n
from degswap.swap.chain import DRAW_BLOCK, SwapChain
from degswap.swap.diagnostics import COLUMNS, StepOutcome, SwapDiagnostics
from degswap.swap.index import EdgeIndex, ForbiddenIndex
from degswap.swap.weights import WeightTable, acceptance_ratio

__all__ = [
    "COLUMNS",
    "DRAW_BLOCK",
    "EdgeIndex",
    "ForbiddenIndex",
    "StepOutcome",
    "SwapChain",
    "SwapDiagnostics",
    "WeightTable",
    "acceptance_ratio",
    "collect_samples",
    "sample_graphs",
    "simple_swap_n",
    "swap_n",
]
