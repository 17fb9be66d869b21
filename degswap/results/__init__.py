"""Result schema validation, writing, and run ID generation."""

from degswap.results.schema import (
    load_diagnostics,
    load_result,
    validate_result,
    write_result,
)
from degswap.results.run_id import generate_run_id

__all__ = [
    "validate_result",
    "write_result",
    "load_result",
    "load_diagnostics",
    "generate_run_id",
]
