"""Run configuration system with frozen, hashable, serializable dataclasses."""

from degswap.config.experiment import (
    ChainConfig,
    InputConfig,
    RunConfig,
    SamplingConfig,
)
from degswap.config.defaults import ANCHOR_CONFIG
from degswap.config.hashing import chain_config_hash, config_hash, full_config_hash
from degswap.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
    load_config,
)

__all__ = [
    "ChainConfig",
    "InputConfig",
    "RunConfig",
    "SamplingConfig",
    "ANCHOR_CONFIG",
    "chain_config_hash",
    "config_hash",
    "full_config_hash",
    "config_from_dict",
    "config_from_json",
    "config_to_dict",
    "config_to_json",
    "load_config",
]
