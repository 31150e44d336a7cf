"""
wounds.py – wound application and timed bleeding for one entity.

A :class:`WoundProcessor` is attached to each living entity. Every damage
event goes through :meth:`WoundProcessor.create_wound`, which applies the
immediate zone damage and may start a :class:`BleedTask` that drains the
entity's global blood once per second until it dies or the bleed is
cancelled.

Exports
-------
• Constants: `BASE_BLEED_RATE`, `PASS_OUT_AMOUNT`, `INSTANT_KILL_AMMO`, `BLEED_PERIOD_S`
• `BleedState`, `BleedTask`, `WoundProcessor`
• `get_wound_intensity`, `attach_wound_processor`
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Callable, Optional, Protocol, runtime_checkable

from . import BleedEngineError
from .config import GameConfig
from .health import BLOOD, GLOBAL_ZONE, HEALTH, DeathEvent, Vitals
from .timers import TimerHandle, TimerQueue

logger = logging.getLogger(__name__)

BASE_BLEED_RATE: float = 250.0   # blood per tick per unit of wound intensity
PASS_OUT_AMOUNT: float = 500.0   # pre-tick blood below this kills
INSTANT_KILL_AMMO = "MeleeWolf"
BLEED_PERIOD_S: float = 1.0


@runtime_checkable
class RandomSource(Protocol):
    def random(self) -> float: ...


@runtime_checkable
class DamageSource(Protocol):
    def get(self, zone: str, kind: str) -> float: ...


def get_wound_intensity(bleed_threshold: float) -> float:
    """Higher bleed threshold means a more intense bleed."""
    return bleed_threshold * 2


class BleedState(StrEnum):
    ACTIVE = auto()
    TERMINATED = auto()


@dataclass(slots=True, eq=False)
class BleedTask:
    """Timer body for one activated bleed; ``wound_intensity`` never changes."""

    owner: "WoundProcessor"
    wound_intensity: float
    state: BleedState = BleedState.ACTIVE
    handle: Optional[TimerHandle] = None

    def stop(self) -> None:
        if self.state is BleedState.TERMINATED:
            return
        self.state = BleedState.TERMINATED
        if self.handle is not None:
            self.handle.stop()

    def __call__(self) -> None:
        if self.state is BleedState.TERMINATED:
            return
        vitals = self.owner.vitals
        if not vitals.is_alive():
            self.stop()
            self.owner._release(self)
            logger.info("%s: bleed stopped, entity no longer alive", vitals.type_name)
            return

        bleeding_intensity = BASE_BLEED_RATE * self.wound_intensity
        global_blood_lvl = vitals.get_health(GLOBAL_ZONE, BLOOD)
        vitals.decrease_health(GLOBAL_ZONE, BLOOD, bleeding_intensity)
        logger.debug(
            "%s: bled %.1f (blood %.1f -> %.1f)",
            vitals.type_name, bleeding_intensity, global_blood_lvl,
            vitals.get_health(GLOBAL_ZONE, BLOOD),
        )

        # compares the level read before this tick's drain
        if global_blood_lvl < PASS_OUT_AMOUNT:
            self.owner._kill("exsanguination")

    tick = __call__


class WoundProcessor:
    """Per-entity wound component holding at most one bleed task."""

    def __init__(
        self,
        vitals: Vitals,
        config: GameConfig,
        timers: TimerQueue,
        rng: RandomSource,
        on_death: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.vitals = vitals
        self.config = config
        self.timers = timers
        self.rng = rng
        self.on_death = on_death
        self.bleed: Optional[BleedTask] = None

    # ------------------------------------------------------------------

    @property
    def is_bleeding(self) -> bool:
        return self.bleed is not None and self.bleed.state is BleedState.ACTIVE

    def apply_wound_damage(self, damage: DamageSource, zone: str, ammo: str) -> None:
        """Apply the immediate health loss of one hit."""
        if ammo == INSTANT_KILL_AMMO:
            self._kill("instant_kill")

        if not zone:
            return

        health_damage = damage.get(zone, HEALTH)
        was_alive = self.vitals.is_alive()
        self.vitals.decrease_health(GLOBAL_ZONE, HEALTH, health_damage)
        self.vitals.decrease_health(zone, HEALTH, health_damage)
        if was_alive and not self.vitals.is_alive():
            self._notify("wound")

    def create_wound(self, damage: DamageSource, zone: str, ammo: str) -> None:
        """Apply ``damage`` and roll for a bleed."""
        self.apply_wound_damage(damage, zone, ammo)

        can_bleed = self.config.can_bleed(self.vitals.type_name, zone)
        bleed_threshold = self.config.bleed_threshold(ammo)
        chance = self.rng.random()

        if can_bleed and chance <= bleed_threshold:
            self._start_bleed(get_wound_intensity(bleed_threshold))
        else:
            logger.debug(
                "%s: no bleed (zone=%r can_bleed=%s chance=%.3f threshold=%.3f)",
                self.vitals.type_name, zone, can_bleed, chance, bleed_threshold,
            )

    def cancel_bleed(self) -> None:
        """Stop the running bleed, if any. Safe to call at any time."""
        task, self.bleed = self.bleed, None
        if task is not None:
            task.stop()

    # ------------------------------------------------------------------

    def _start_bleed(self, wound_intensity: float) -> None:
        # a new bleed replaces the old one; intensities never stack
        self.cancel_bleed()
        task = BleedTask(self, wound_intensity)
        task.handle = self.timers.schedule_periodic(BLEED_PERIOD_S, task, repeat=True)
        self.bleed = task
        logger.info(
            "%s: bleeding started, intensity %.2f", self.vitals.type_name, wound_intensity
        )

    def _release(self, task: BleedTask) -> None:
        if self.bleed is task:
            self.bleed = None

    def _kill(self, cause: str) -> None:
        was_alive = self.vitals.is_alive()
        self.vitals.set_health(GLOBAL_ZONE, HEALTH, 0.0)
        if was_alive:
            self._notify(cause)

    def _notify(self, cause: str) -> None:
        logger.info("%s: killed (%s)", self.vitals.type_name, cause)
        if self.on_death is not None:
            self.on_death(cause)


def attach_wound_processor(world, eid: int, config: GameConfig) -> WoundProcessor:
    """Create the processor for ``eid`` (which must have ``Vitals``) and store it on the world."""
    vitals = world.store(Vitals).get(eid)
    if vitals is None:
        raise BleedEngineError(f"entity {eid} has no Vitals component")

    def _post_death(cause: str) -> None:
        world.post_event(DeathEvent(world.tick, eid, cause))  # type: ignore[arg-type]

    proc = WoundProcessor(vitals, config, world.timers, world.rng, on_death=_post_death)
    world.store(WoundProcessor).add(eid, proc)
    return proc
