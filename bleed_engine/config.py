"""
config.py – read-only key-value game configuration.

Keys are space-separated class paths, e.g.
``"CfgAmmo Bullet_308Win DamageApplied bleedThreshold"``. Nested dicts (as
loaded from JSON) are flattened into that form. Every lookup falls back to a
default instead of raising.
"""
from __future__ import annotations

import json
import logging
import os
import pathlib
from typing import Any, Dict, Mapping

from . import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV = "BLEED_ENGINE_CONFIG"


def can_bleed_path(entity_type: str, zone: str) -> str:
    return f"CfgVehicles {entity_type} DamageSystem DamageZones {zone} canBleed"


def bleed_threshold_path(ammo: str) -> str:
    return f"CfgAmmo {ammo} DamageApplied bleedThreshold"


def _flatten(prefix: str, node: Mapping[str, Any], out: Dict[str, float]) -> None:
    for key, val in node.items():
        path = f"{prefix} {key}" if prefix else str(key)
        if isinstance(val, Mapping):
            _flatten(path, val, out)
        elif isinstance(val, bool):
            out[path] = 1.0 if val else 0.0
        elif isinstance(val, (int, float)):
            out[path] = float(val)
        else:
            raise ConfigError(f"{path}: expected a number, got {type(val).__name__}")


class GameConfig:
    """Flat path → float lookup table."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, float] | None = None) -> None:
        self._values: Dict[str, float] = dict(values or {})

    @classmethod
    def from_dict(cls, tree: Mapping[str, Any]) -> "GameConfig":
        flat: Dict[str, float] = {}
        _flatten("", tree, flat)
        return cls(flat)

    def config_get_float(self, path: str, default: float = 0.0) -> float:
        return self._values.get(path, default)

    def can_bleed(self, entity_type: str, zone: str) -> bool:
        """Whether ``zone`` of ``entity_type`` supports bleeding; missing → False."""
        return self.config_get_float(can_bleed_path(entity_type, zone)) > 0

    def bleed_threshold(self, ammo: str) -> float:
        """Bleed probability bound for ``ammo`` in [0, 1]; missing → 0.0."""
        return min(1.0, max(0.0, self.config_get_float(bleed_threshold_path(ammo))))

    def __len__(self) -> int:
        return len(self._values)


def load_config(path: str | os.PathLike[str] | None = None) -> GameConfig:
    """Load a JSON config file; ``None`` reads ``$BLEED_ENGINE_CONFIG`` or returns an empty config."""
    if path is None:
        path = os.getenv(CONFIG_ENV)
        if not path:
            return GameConfig()
    p = pathlib.Path(path)
    try:
        tree = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"cannot load config {p}: {exc}") from exc
    if not isinstance(tree, dict):
        raise ConfigError(f"{p}: top level must be an object")
    cfg = GameConfig.from_dict(tree)
    logger.info("loaded %d config values from %s", len(cfg), p)
    return cfg
