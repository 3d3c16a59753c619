"""
Skin blob records consumed from the external blob extractor.
"""

from dataclasses import dataclass
from enum import Enum, auto

from .geometry import Point


class BlobType(Enum):
    """Coarse vertical classification of a blob within the body frame."""
    LOW = auto()
    MEDIUM = auto()
    HIGH = auto()
    UNKNOWN = auto()


class Condition(Enum):
    """Qualitative scene condition attached to an injected estimate."""
    NORMAL = auto()
    ONLY_HEAD = auto()  # Only a head region is visible, no arm


@dataclass(frozen=True)
class BlobInformation:
    """
    Connected skin region described by its extreme points.

    Attributes:
        left: Leftmost contour point.
        right: Rightmost contour point.
        top: Topmost contour point.
        bottom: Bottommost contour point.
        type: Vertical classification.
    """
    left: Point
    right: Point
    top: Point
    bottom: Point
    type: BlobType = BlobType.UNKNOWN

    @classmethod
    def from_bounds(
        cls, x0: int, y0: int, x1: int, y1: int, blob_type: BlobType = BlobType.UNKNOWN
    ) -> "BlobInformation":
        """Build a blob from an axis-aligned box (extremes at the edge midpoints)."""
        cx = (x0 + x1) // 2
        cy = (y0 + y1) // 2
        return cls(
            left=Point(x0, cy),
            right=Point(x1, cy),
            top=Point(cx, y0),
            bottom=Point(cx, y1),
            type=blob_type,
        )

    @property
    def height(self) -> int:
        return self.bottom.y - self.top.y

    @property
    def width(self) -> int:
        return self.right.x - self.left.x

    def contains(self, point: Point) -> bool:
        """Check whether point lies inside the bounding box (edges included)."""
        return (
            self.left.x <= point.x <= self.right.x
            and self.top.y <= point.y <= self.bottom.y
        )
