"""Config loading for rejection-sampling limits."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

__all__ = [
    "RejectionConfig",
    "load_json",
    "apply_overrides",
    "rejection_config",
]


@dataclass(frozen=True, slots=True)
class RejectionConfig:
    """Limits for rejection-sampling loops.

    The default leaves every loop unbounded. Setting ``max_attempts`` makes a
    loop raise ``RejectionLimitExceeded`` once that many draws were rejected.

    Attributes:
        max_attempts: Maximum number of rejected draws, or None for no cap.
    """

    max_attempts: int | None = None

    def __post_init__(self) -> None:
        """Validate that max_attempts is a positive integer when set."""
        if self.max_attempts is not None and (
            isinstance(self.max_attempts, bool)
            or not isinstance(self.max_attempts, int)
            or self.max_attempts < 1
        ):
            raise ValueError(f"max_attempts must be a positive integer or None, got {self.max_attempts!r}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> RejectionConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(f"Unknown rejection config keys: {sorted(unknown)}")
        return cls(**dict(mapping))


def load_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def apply_overrides(config: dict[str, Any], overrides: Iterable[str]) -> dict[str, Any]:
    """Return a copy of ``config`` with dotted ``key=value`` overrides applied."""
    result = json.loads(json.dumps(config))
    for item in overrides:
        if "=" not in item:
            raise ValueError(f"Override must be key=value, got: {item}")
        path, raw_val = item.split("=", 1)
        keys = path.split(".")
        target = result
        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = _parse_value(raw_val)
    return result


def rejection_config(config: Mapping[str, Any]) -> RejectionConfig:
    """Read the ``rejection`` section of a loaded config.

    A missing or null section yields the unbounded default.
    """
    return RejectionConfig.from_mapping(config.get("rejection") or {})
