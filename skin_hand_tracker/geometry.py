"""
Integer pixel coordinates used throughout the tracker.

A missing estimate is represented as None rather than a reserved coordinate.
The legacy (0, 0) encoding is only produced at the output boundary.
"""

import math
from dataclasses import dataclass
from typing import Optional

SENTINEL: tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class Point:
    """Pixel position in image coordinates (x to the right, y down)."""
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def key(self) -> tuple[int, int]:
        """Hashable integer key for visited-set bookkeeping."""
        return (self.x, self.y)


def to_sentinel(point: Optional[Point]) -> tuple[int, int]:
    """Encode an optional point for consumers that expect (0, 0) as 'not found'."""
    if point is None:
        return SENTINEL
    return point.as_tuple()


def from_sentinel(xy: tuple[int, int]) -> Optional[Point]:
    """Decode a legacy (x, y) pair, mapping (0, 0) to None."""
    x, y = int(xy[0]), int(xy[1])
    if (x, y) == SENTINEL:
        return None
    return Point(x, y)
