# ================================================================
#  health.py – zoned health & blood pools for living entities
# ================================================================
"""
Stdlib-only resource model that wound processing reads and mutates.

Exports
-------
• Resource names: `GLOBAL_ZONE`, `HEALTH`, `BLOOD`, `SHOCK`
• Component dataclass: `Vitals`
• Damage input: `DamageResult`
• Broadcast: `DeathEvent`
• Builder: `build_default_vitals`
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 1.  Resource names
# ---------------------------------------------------------------------------

GLOBAL_ZONE = ""
HEALTH = "Health"
BLOOD = "Blood"
SHOCK = "Shock"

# kinds tracked on the global pool; zones only carry HEALTH
GLOBAL_KINDS = (HEALTH, BLOOD, SHOCK)

DEFAULT_MAX: Dict[str, float] = {
    HEALTH: 100.0,
    BLOOD: 5_000.0,
    SHOCK: 100.0,
}

DEFAULT_ZONE_HP: Dict[str, float] = {
    "Zone_Head": 50.0,
    "Zone_Neck": 80.0,
    "Zone_Chest": 150.0,
    "Zone_Belly": 120.0,
    "Zone_FrontLegs": 100.0,
    "Zone_BackLegs": 100.0,
}


def _kind(kind: str) -> str:
    # SetHealth("", "", v) addresses global Health
    return kind or HEALTH


# ---------------------------------------------------------------------------
# 2.  Damage input
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class DamageResult:
    """Per-zone damage table produced by the hit pipeline (zone → kind → amount)."""

    table: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def get(self, zone: str, kind: str) -> float:
        """Damage of ``kind`` dealt to ``zone``; 0.0 when absent."""
        return float(self.table.get(zone, {}).get(kind, 0.0))

    def add(self, zone: str, kind: str, amount: float) -> "DamageResult":
        per_zone = self.table.setdefault(zone, {})
        per_zone[kind] = per_zone.get(kind, 0.0) + amount
        return self

    @classmethod
    def single(cls, zone: str, health: float) -> "DamageResult":
        return cls().add(zone, HEALTH, health)


# ---------------------------------------------------------------------------
# 3.  Vitals component
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class DeathEvent:
    """Broadcast when an entity dies."""

    tick: int
    entity_id: int
    cause: Literal["instant_kill", "wound", "exsanguination"]


@dataclass(slots=True)
class Vitals:
    """Global and per-zone resource pools for one entity.

    Values are clamped to ``[0, max]``. Once global health reaches zero the
    entity is dead for good; later writes still land but never revive it.
    """

    type_name: str
    pools: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_MAX))
    max_pools: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_MAX))
    zones: Dict[str, float] = field(default_factory=dict)
    max_zones: Dict[str, float] = field(default_factory=dict)
    alive: bool = True

    def is_alive(self) -> bool:
        return self.alive

    def get_health(self, zone: str, kind: str) -> float:
        """Current value; unknown zones or kinds read 0.0."""
        kind = _kind(kind)
        if zone:
            return self.zones.get(zone, 0.0) if kind == HEALTH else 0.0
        return self.pools.get(kind, 0.0)

    def set_health(self, zone: str, kind: str, value: float) -> None:
        kind = _kind(kind)
        if zone:
            if kind != HEALTH or zone not in self.zones:
                return
            self.zones[zone] = min(max(0.0, value), self.max_zones.get(zone, value))
            return
        if kind not in self.pools:
            return
        self.pools[kind] = min(max(0.0, value), self.max_pools.get(kind, value))
        if kind == HEALTH and self.pools[HEALTH] <= 0.0 and self.alive:
            self.alive = False
            logger.info("%s died (global health depleted)", self.type_name)

    def decrease_health(self, zone: str, kind: str, amount: float) -> None:
        self.set_health(zone, kind, self.get_health(zone, kind) - amount)


# ---------------------------------------------------------------------------
# 4.  Builder
# ---------------------------------------------------------------------------


def build_default_vitals(
    type_name: str,
    zones: Optional[Mapping[str, float]] = None,
    blood: Optional[float] = None,
) -> Vitals:
    """Return full-health ``Vitals`` with ``zones`` (default animal layout)."""
    zone_hp = dict(DEFAULT_ZONE_HP if zones is None else zones)
    vit = Vitals(type_name, zones=dict(zone_hp), max_zones=dict(zone_hp))
    if blood is not None:
        vit.max_pools[BLOOD] = max(vit.max_pools[BLOOD], blood)
        vit.pools[BLOOD] = blood
    return vit
