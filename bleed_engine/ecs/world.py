from __future__ import annotations
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Any, List, Type, TypeVar

from .components import ComponentStore
from .entity import EntityIDGenerator
from ..timers import TimerQueue

T = TypeVar("T")


@dataclass
class World:
    """Shared simulation state object handed to every System."""
    rng: random.Random
    tick: int = 0
    entities: EntityIDGenerator = field(default_factory=EntityIDGenerator)
    components: Dict[type, Any] = field(default_factory=dict)  # type -> ComponentStore
    events: deque = field(default_factory=deque)               # transient per-tick queues
    deferred: list[Any] = field(default_factory=list)
    timers: TimerQueue = field(default_factory=TimerQueue)

    def store(self, comp_type: Type[T]) -> ComponentStore[T]:
        """Return the store for ``comp_type``, creating it on first use."""
        st = self.components.get(comp_type)
        if st is None:
            st = self.components[comp_type] = ComponentStore()
        return st

    def spawn(self) -> int:
        return self.entities.next_id()

    def despawn(self, eid: int) -> None:
        """Drop every component of ``eid``; components with ``cancel_bleed`` are stopped first."""
        for st in self.components.values():
            comp = st.remove(eid)
            cancel = getattr(comp, "cancel_bleed", None)
            if cancel is not None:
                cancel()

    def post_event(self, evt: Any) -> None:
        self.events.append(evt)

    def consume_events(self, evt_type: type | None = None) -> List[Any]:
        """Pop events of ``evt_type`` (all events when None); others stay queued."""
        if evt_type is None:
            out = list(self.events)
            self.events.clear()
            return out
        out, keep = [], deque()
        for evt in self.events:
            (out if isinstance(evt, evt_type) else keep).append(evt)
        self.events = keep
        return out

    def flush(self) -> None:
        self.deferred.clear()
        self.tick += 1
