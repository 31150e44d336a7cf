from bleed_engine.health import (
    BLOOD,
    GLOBAL_ZONE,
    HEALTH,
    SHOCK,
    DamageResult,
    build_default_vitals,
)


def test_damage_result_defaults_to_zero():
    dmg = DamageResult.single("Zone_Neck", 12.5)
    assert dmg.get("Zone_Neck", HEALTH) == 12.5
    assert dmg.get("Zone_Neck", BLOOD) == 0.0
    assert dmg.get("Zone_Head", HEALTH) == 0.0


def test_damage_result_accumulates():
    dmg = DamageResult().add("Zone_Chest", HEALTH, 5).add("Zone_Chest", HEALTH, 7)
    assert dmg.get("Zone_Chest", HEALTH) == 12.0


def test_empty_kind_means_health():
    vit = build_default_vitals("Animal_CervusElaphus")
    vit.set_health(GLOBAL_ZONE, "", 40.0)
    assert vit.get_health(GLOBAL_ZONE, HEALTH) == 40.0


def test_values_clamp_to_range():
    vit = build_default_vitals("Animal_CervusElaphus")
    vit.decrease_health(GLOBAL_ZONE, BLOOD, 10_000.0)
    assert vit.get_health(GLOBAL_ZONE, BLOOD) == 0.0
    vit.set_health("Zone_Neck", HEALTH, 1_000.0)
    assert vit.get_health("Zone_Neck", HEALTH) == 80.0
    vit.decrease_health(GLOBAL_ZONE, SHOCK, -50.0)
    assert vit.get_health(GLOBAL_ZONE, SHOCK) == 100.0


def test_blood_loss_alone_does_not_kill():
    vit = build_default_vitals("Animal_CervusElaphus")
    vit.set_health(GLOBAL_ZONE, BLOOD, 0.0)
    assert vit.is_alive()


def test_zero_health_is_death_and_sticks():
    vit = build_default_vitals("Animal_CervusElaphus")
    vit.decrease_health(GLOBAL_ZONE, HEALTH, 100.0)
    assert not vit.is_alive()
    vit.set_health(GLOBAL_ZONE, HEALTH, 100.0)
    assert not vit.is_alive()


def test_unknown_zone_reads_zero_and_ignores_writes():
    vit = build_default_vitals("Animal_CervusElaphus", zones={"Zone_Body": 50.0})
    vit.decrease_health("Zone_Tail", HEALTH, 10.0)
    assert vit.get_health("Zone_Tail", HEALTH) == 0.0
    assert "Zone_Tail" not in vit.zones
    assert vit.get_health("Zone_Body", BLOOD) == 0.0


def test_custom_blood_pool():
    vit = build_default_vitals("Animal_UrsusArctos", blood=8_000.0)
    assert vit.get_health(GLOBAL_ZONE, BLOOD) == 8_000.0
    assert vit.max_pools[BLOOD] == 8_000.0
