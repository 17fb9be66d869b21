"""JSON serialization and deserialization for run configs."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from dacite import Config as DaciteConfig, from_dict

from degswap.config.experiment import RunConfig

# strict rejects unknown keys; cast turns JSON arrays back into tuples for tags.
_DACITE_CONFIG = DaciteConfig(cast=[tuple], check_types=True, strict=True)


def config_to_dict(config: RunConfig) -> dict[str, Any]:
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> RunConfig:
    """Reconstruct a RunConfig; missing sections take their defaults."""
    return from_dict(data_class=RunConfig, data=d, config=_DACITE_CONFIG)


def config_to_json(config: RunConfig) -> str:
    """Serialize with sorted keys and 2-space indent for diffability."""
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> RunConfig:
    return config_from_dict(json.loads(json_str))


def load_config(path: str | Path) -> RunConfig:
    return config_from_json(Path(path).read_text())
