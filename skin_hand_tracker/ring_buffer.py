"""
Fixed-capacity circular buffer for per-hand history.
"""

from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """
    Circular buffer with a head index pointing at the newest slot.

    Every slot starts empty (None). Pushing overwrites the oldest slot.
    Slots are addressed relative to the newest entry, so callers never do
    modulo arithmetic themselves.

    Attributes:
        capacity: Number of slots.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._slots: list[Optional[T]] = [None] * capacity
        self._head = 0  # Index of the newest slot

    def _index(self, n: int) -> int:
        if not 0 <= n < self.capacity:
            raise IndexError(f"history offset {n} outside capacity {self.capacity}")
        return (self._head - n) % self.capacity

    def push(self, item: Optional[T]) -> None:
        """Store item as the newest entry, overwriting the oldest slot."""
        self._head = (self._head + 1) % self.capacity
        self._slots[self._head] = item

    def nth_most_recent(self, n: int) -> Optional[T]:
        """Get the entry n pushes back (0 is the newest)."""
        return self._slots[self._index(n)]

    def replace_nth_most_recent(self, n: int, item: Optional[T]) -> None:
        self._slots[self._index(n)] = item

    @property
    def latest(self) -> Optional[T]:
        return self._slots[self._head]

    def recent(self, count: int) -> list[Optional[T]]:
        """Get the newest `count` slots, newest first."""
        return [self.nth_most_recent(n) for n in range(count)]

    def oldest_to_newest(self) -> Iterator[Optional[T]]:
        for n in range(self.capacity - 1, -1, -1):
            yield self.nth_most_recent(n)

    @property
    def filled(self) -> int:
        """Number of non-empty slots."""
        return sum(1 for slot in self._slots if slot is not None)

    @property
    def is_full(self) -> bool:
        return self.filled == self.capacity

    def clear(self) -> None:
        self._slots = [None] * self.capacity
        self._head = 0

    def __len__(self) -> int:
        return self.capacity

    def __iter__(self) -> Iterator[Optional[T]]:
        return self.oldest_to_newest()
