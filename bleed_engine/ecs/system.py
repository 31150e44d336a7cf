from __future__ import annotations
import bisect
from typing import Protocol, List, Callable, Iterator, runtime_checkable


@runtime_checkable
class System(Protocol):
    """Anything callable once per tick; lower ``priority`` runs first."""

    priority: int = 0

    def __call__(self, world, rng, tick: int, dt_ns: int): ...


def _priority(system: Callable) -> int:
    return getattr(system, "priority", 0)


class SystemRegistry:
    """Priority-ordered system list; equal priorities keep registration order."""

    __slots__ = ("_systems",)

    def __init__(self) -> None:
        self._systems: List[Callable] = []

    def register(self, system: System) -> System:
        keys = [_priority(s) for s in self._systems]
        self._systems.insert(bisect.bisect(keys, _priority(system)), system)
        return system

    def unregister(self, system: Callable) -> None:
        if system in self._systems:
            self._systems.remove(system)

    def __iter__(self) -> Iterator[Callable]:
        return iter(self._systems.copy())

    def __len__(self) -> int:
        return len(self._systems)

    @property
    def systems(self) -> List[Callable]:
        return self._systems.copy()
