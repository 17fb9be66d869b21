"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from degswap.config.experiment import RunConfig


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Deterministic SHA-256 hash of a config dataclass.

    Args:
        config: Any dataclass instance (or sub-config).
        exclude_fields: Optional top-level or dotted field paths to drop
            before hashing, e.g. ["seed", "input.edges_path"].

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    d = asdict(config)
    for field_path in exclude_fields or []:
        *parents, leaf = field_path.split(".")
        current = d
        for part in parents:
            current = current.get(part)
            if not isinstance(current, dict):
                break
        else:
            current.pop(leaf, None)
    serialized = json.dumps(d, sort_keys=True, ensure_ascii=True, separators=(",", ":"))
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def chain_config_hash(config: RunConfig) -> str:
    """Hash of the chain parameters alone (shared across seeds and inputs)."""
    return config_hash(config.chain)


def full_config_hash(config: RunConfig) -> str:
    """Hash for full run identity, seed included."""
    return config_hash(config)
