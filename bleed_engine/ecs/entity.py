from __future__ import annotations


class EntityIDGenerator:
    """Monotonic entity ids; ids are never reused within one world."""

    __slots__ = ("_next",)

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def next_id(self) -> int:
        eid = self._next
        self._next += 1
        return eid
