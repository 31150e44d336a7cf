from __future__ import annotations
import logging
import random

__all__ = [
    "__version__",
    "init_rng",
    "BleedEngineError",
    "ConfigError",
    "SchedulerError",
]
__version__ = "0.1.0.dev0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


class BleedEngineError(Exception):
    """Public umbrella exception for engine misuse."""


class ConfigError(BleedEngineError):
    """Configuration source could not be read or parsed."""


class SchedulerError(BleedEngineError):
    """Invalid request made to the timer queue."""


def init_rng(seed: int | None = None) -> random.Random:
    """Return the single RNG used by the simulation."""
    return random.Random(seed)
