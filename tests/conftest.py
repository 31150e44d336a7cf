# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add repo root (parent of this file) to import search path
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from bleed_engine.config import GameConfig, bleed_threshold_path, can_bleed_path  # noqa: E402
from bleed_engine.health import build_default_vitals  # noqa: E402
from bleed_engine.timers import TimerQueue  # noqa: E402
from bleed_engine.wounds import WoundProcessor  # noqa: E402

DEER = "Animal_CervusElaphus"


class FixedSamples:
    """Random source that replays preset samples."""

    def __init__(self, *samples: float) -> None:
        self.samples = list(samples)
        self.drawn = 0

    def random(self) -> float:
        self.drawn += 1
        return self.samples.pop(0)


@pytest.fixture
def config():
    return GameConfig(
        {
            can_bleed_path(DEER, "Zone_Neck"): 1.0,
            can_bleed_path(DEER, "Zone_FrontLegs"): 0.0,
            bleed_threshold_path("Bullet_308Win"): 0.5,
            bleed_threshold_path("Bullet_Always"): 1.0,
            bleed_threshold_path("Bullet_Never"): 0.0,
            bleed_threshold_path("MeleeWolf"): 0.3,
        }
    )


@pytest.fixture
def timers():
    return TimerQueue()


@pytest.fixture
def vitals():
    return build_default_vitals(DEER)


@pytest.fixture
def make_processor(vitals, config, timers):
    def _make(*samples: float, deaths=None):
        on_death = deaths.append if deaths is not None else None
        return WoundProcessor(vitals, config, timers, FixedSamples(*samples), on_death=on_death)
    return _make
