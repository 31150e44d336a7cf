from __future__ import annotations
from typing import TypeVar, Dict, Generic, Iterator, Tuple

T = TypeVar("T")


class ComponentStore(Generic[T]):
    """One slot per entity id for a single component type."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: Dict[int, T] = {}

    def add(self, eid: int, comp: T) -> None:
        self._data[eid] = comp

    def get(self, eid: int) -> T | None:
        return self._data.get(eid)

    def remove(self, eid: int) -> T | None:
        return self._data.pop(eid, None)

    def items(self) -> Iterator[Tuple[int, T]]:
        return iter(list(self._data.items()))

    def __contains__(self, eid: object) -> bool:
        return eid in self._data

    def __len__(self) -> int:
        return len(self._data)
