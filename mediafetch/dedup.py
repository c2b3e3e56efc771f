from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class OrderedSet(Generic[T]):
    """Insertion-ordered set: first occurrence wins, later duplicates are ignored."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: dict[T, None] = {}
        self.update(items)

    def add(self, item: T) -> None:
        self._items.setdefault(item, None)

    def update(self, items: Iterable[T]) -> None:
        for item in items:
            self.add(item)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({list(self._items)!r})"

    def to_list(self) -> list[T]:
        return list(self._items)
