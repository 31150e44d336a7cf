import random

import pytest

from bleed_engine import BleedEngineError, init_rng
from bleed_engine.ecs.world import World
from bleed_engine.engine_tick import (
    DEFAULT_DT_NS,
    DEMO_ANIMAL,
    FixedStepScheduler,
    default_systems,
    demo_config,
    main,
)
from bleed_engine.health import BLOOD, GLOBAL_ZONE, DamageResult, DeathEvent, Vitals, build_default_vitals
from bleed_engine.timers import NS_PER_S
from bleed_engine.wounds import WoundProcessor, attach_wound_processor

from conftest import FixedSamples

TICKS_PER_S = NS_PER_S // DEFAULT_DT_NS


def _world_with_deer(seed=1):
    world = World(init_rng(seed))
    eid = world.spawn()
    world.store(Vitals).add(eid, build_default_vitals(DEMO_ANIMAL))
    proc = attach_wound_processor(world, eid, demo_config())
    return world, eid, proc


def test_scheduler_orders_systems_by_priority():
    seen = []

    class Sys:
        def __init__(self, name, priority):
            self.name, self.priority = name, priority

        def __call__(self, world, rng, tick, dt_ns):
            seen.append(self.name)

    world = World(random.Random(0))
    FixedStepScheduler([Sys("late", 5), Sys("early", -1)]).run(2, world)
    assert seen == ["early", "late", "early", "late"]
    assert world.tick == 2


def test_bleed_follows_simulation_clock():
    world, eid, proc = _world_with_deer()
    proc.rng = FixedSamples(0.2)
    proc.create_wound(DamageResult.single("Zone_Neck", 5.0), "Zone_Neck", "Bullet_308Win")
    sched = FixedStepScheduler(default_systems().systems)

    sched.run(TICKS_PER_S - 1, world)
    assert proc.vitals.get_health(GLOBAL_ZONE, BLOOD) == 5_000.0
    sched.run(1, world)
    assert proc.vitals.get_health(GLOBAL_ZONE, BLOOD) == 4_750.0


def test_bleed_out_posts_death_event():
    world, eid, proc = _world_with_deer()
    proc._start_bleed(1.0)
    FixedStepScheduler(default_systems().systems).run(25 * TICKS_PER_S, world)
    events = world.consume_events(DeathEvent)
    assert [(e.entity_id, e.cause) for e in events] == [(eid, "exsanguination")]
    assert not proc.is_bleeding
    assert world.timers.pending == 0


def test_despawn_cancels_bleed():
    world, eid, proc = _world_with_deer()
    proc._start_bleed(1.0)
    world.despawn(eid)
    assert world.store(WoundProcessor).get(eid) is None
    assert world.timers.pending == 0


def test_attach_requires_vitals():
    world = World(init_rng(0))
    with pytest.raises(BleedEngineError):
        attach_wound_processor(world, world.spawn(), demo_config())


def test_consume_events_filters_by_type():
    world = World(init_rng(0))
    world.post_event("other")
    world.post_event(DeathEvent(0, 1, "wound"))
    assert len(world.consume_events(DeathEvent)) == 1
    assert world.consume_events() == ["other"]


def test_demo_cli_runs(capsys, monkeypatch):
    monkeypatch.delenv("BLEED_ENGINE_CONFIG", raising=False)
    main(["--seconds", "3", "--ammo", "MeleeWolf"])
    out = capsys.readouterr().out
    assert "hit Zone_Neck with MeleeWolf" in out
    assert "instant_kill" in out


def test_registry_keeps_priority_order():
    from bleed_engine.ecs.system import SystemRegistry
    from bleed_engine.timers import TimerSystem

    reg = SystemRegistry()
    timer = reg.register(TimerSystem())
    first = lambda world, rng, tick, dt_ns: None  # noqa: E731
    reg.register(first)
    assert reg.systems == [first, timer]
    reg.unregister(first)
    reg.unregister(first)
    assert list(reg) == [timer]
    assert len(reg) == 1
