"""Configuration utilities.

- Fail fast on missing files / invalid structure.
- Keep config mutation explicit and localized.
"""

from __future__ import annotations

import os
from copy import deepcopy
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

import yaml


class ConfigError(ValueError):
    """Raised when configuration is missing or invalid."""


def load_yaml(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        obj = yaml.safe_load(f)
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ConfigError(f"YAML root must be a mapping (dict). Got: {type(obj).__name__} @ {path}")
    return obj


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = deepcopy(base)

    def rec(a: Dict[str, Any], b: Dict[str, Any]) -> None:
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                rec(a[k], v)
            else:
                a[k] = v

    rec(out, override)
    return out


_METRICS = ("euclidean", "manhattan")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SolverConfig:
    time_limit: Optional[float] = None
    source: Optional[str] = None
    metric: str = "euclidean"
    rounding: bool = True
    log_level: str = "INFO"
    playback_speed: float = 1.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SolverConfig":
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown solver config keys: {', '.join(unknown)}")

        values = dict(data)
        time_limit = values.get("time_limit")
        if time_limit is not None:
            if isinstance(time_limit, bool) or not isinstance(time_limit, (int, float)) or time_limit <= 0:
                raise ConfigError(f"'time_limit' must be a positive number or null, got {time_limit!r}")
            values["time_limit"] = float(time_limit)
        if values.get("source") is not None:
            values["source"] = str(values["source"])
        metric = str(values.get("metric", "euclidean")).lower()
        if metric not in _METRICS:
            raise ConfigError(f"'metric' must be one of {_METRICS}, got {metric!r}")
        values["metric"] = metric
        if not isinstance(values.get("rounding", True), bool):
            raise ConfigError("'rounding' must be a boolean")
        level = str(values.get("log_level", "INFO")).upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"'log_level' must be one of {_LOG_LEVELS}, got {level!r}")
        values["log_level"] = level
        speed = values.get("playback_speed", 1.0)
        if isinstance(speed, bool) or not isinstance(speed, (int, float)) or speed <= 0:
            raise ConfigError(f"'playback_speed' must be a positive number, got {speed!r}")
        values["playback_speed"] = float(speed)
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "SolverConfig":
        picked = {k: v for k, v in overrides.items() if v is not None}
        return SolverConfig.from_mapping(merge_dicts(asdict(self), picked))


def load_config(path: str | None = None) -> SolverConfig:
    """Load ``SolverConfig`` from a YAML file; the ``solver`` section is used when present."""
    if path is None:
        return SolverConfig()
    data = load_yaml(path)
    section = data.get("solver", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'solver' section must be a mapping @ {path}")
    return SolverConfig.from_mapping(section)


__all__ = ["ConfigError", "SolverConfig", "load_config", "load_yaml", "merge_dicts"]
