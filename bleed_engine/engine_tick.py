from __future__ import annotations

import os, time, argparse, logging, random, sys
from typing import Sequence, Callable

from .ecs.system import SystemRegistry
from .ecs.world import World
from .config import GameConfig, load_config, bleed_threshold_path, can_bleed_path
from .health import BLOOD, HEALTH, GLOBAL_ZONE, DamageResult, DeathEvent, Vitals, build_default_vitals
from .timers import NS_PER_S, TimerSystem
from .wounds import attach_wound_processor
from . import init_rng

logger = logging.getLogger(__name__)

DEFAULT_DT_NS = 20_000_000  # 50 Hz


class FixedStepScheduler:
    """Runs systems at a fixed logical timestep."""

    def __init__(
        self,
        systems: Sequence[Callable],
        dt_ns: int = DEFAULT_DT_NS,
        rng: random.Random | None = None,
    ) -> None:
        self.systems = tuple(sorted(systems, key=lambda s: getattr(s, "priority", 0)))
        self.dt_ns = dt_ns
        self.rng = rng

    def run(self, num_ticks: int, world: World) -> None:
        profile = os.getenv("BLEED_ENGINE_PROFILE") == "1"
        rng = self.rng if self.rng is not None else world.rng
        for _ in range(num_ticks):
            for system in self.systems:
                if profile:
                    start = time.perf_counter_ns()
                    system(world, rng, world.tick, self.dt_ns)
                    sys.stderr.write(
                        f"{system.__class__.__name__} {time.perf_counter_ns()-start} ns\n"
                    )
                else:
                    system(world, rng, world.tick, self.dt_ns)
            world.flush()


def default_systems() -> SystemRegistry:
    reg = SystemRegistry()
    reg.register(TimerSystem())
    return reg


DEMO_ANIMAL = "Animal_CervusElaphus"
DEMO_AMMO = "Bullet_308Win"


def demo_config() -> GameConfig:
    """Small built-in config used when no file is given."""
    return GameConfig(
        {
            can_bleed_path(DEMO_ANIMAL, "Zone_Neck"): 1.0,
            can_bleed_path(DEMO_ANIMAL, "Zone_Chest"): 1.0,
            can_bleed_path(DEMO_ANIMAL, "Zone_Belly"): 1.0,
            bleed_threshold_path(DEMO_AMMO): 0.5,
            bleed_threshold_path("MeleeWolf"): 0.3,
        }
    )


def _demo(seed: int, seconds: int, zone: str, ammo: str, damage: float, config: GameConfig) -> None:
    world = World(init_rng(seed))
    scheduler = FixedStepScheduler(default_systems().systems, DEFAULT_DT_NS)

    eid = world.spawn()
    world.store(Vitals).add(eid, build_default_vitals(DEMO_ANIMAL))
    proc = attach_wound_processor(world, eid, config)
    vit = proc.vitals

    proc.create_wound(DamageResult.single(zone, damage), zone, ammo)
    print(f"hit {zone or '<none>'} with {ammo}: bleeding={proc.is_bleeding}")

    ticks_per_s = NS_PER_S // DEFAULT_DT_NS
    for sec in range(1, seconds + 1):
        scheduler.run(ticks_per_s, world)
        print(
            f"t={sec:>3}s  health={vit.get_health(GLOBAL_ZONE, HEALTH):7.1f}"
            f"  blood={vit.get_health(GLOBAL_ZONE, BLOOD):7.1f}"
        )
        if not vit.is_alive() and not proc.is_bleeding:
            break

    for evt in world.consume_events(DeathEvent):
        print(f"death: entity {evt.entity_id} at tick {evt.tick} ({evt.cause})")


def main(argv: Sequence[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Wound & bleed demo")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--seconds", type=int, default=30)
    ap.add_argument("--zone", default="Zone_Neck")
    ap.add_argument("--ammo", default=DEMO_AMMO)
    ap.add_argument("--damage", type=float, default=20.0)
    ap.add_argument("--config", help="JSON config file (default: $BLEED_ENGINE_CONFIG or built-in)")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)
    if not len(config):
        config = demo_config()
    _demo(args.seed, args.seconds, args.zone, args.ammo, args.damage, config)


if __name__ == "__main__":
    main()
