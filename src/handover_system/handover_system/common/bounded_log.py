from __future__ import annotations

from collections import deque
from itertools import islice
from typing import Deque, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class BoundedLog(Generic[T]):
    """Newest-first append-only log holding at most ``capacity`` entries.

    Pushing onto a full log evicts the oldest entry. When seeded from a longer
    newest-first sequence, only the newest ``capacity`` entries are kept.
    """

    def __init__(self, capacity: int, entries: Iterable[T] = ()):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = int(capacity)
        self._entries: Deque[T] = deque(islice(entries, self._capacity), maxlen=self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, entry: T) -> None:
        self._entries.appendleft(entry)

    def newest(self, limit: Optional[int] = None) -> tuple[T, ...]:
        if limit is None:
            return tuple(self._entries)
        return tuple(islice(self._entries, max(int(limit), 0)))

    def __iter__(self) -> Iterator[T]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
