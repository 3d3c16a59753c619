"""
Two-hand frame driver.

Both hands resolve on the same frame data first; only then does each hand
run its intersection check against the other's freshly resolved position.
Everything runs synchronously on the caller's thread.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .blobs import BlobInformation, Condition
from .config import HandTrackerConfig
from .coverage import validate_mask, validate_same_shape
from .geometry import Point, to_sentinel
from .hand import Hand, HandSide
from .logger import get_logger
from .observer import HandObserver

logger = get_logger("TwoHandTracker")


@dataclass
class FrameResult:
    """Resolved positions for one frame (None = hand not found)."""
    frame_index: int
    left: Optional[Point]
    right: Optional[Point]
    intersecting: bool = False

    def as_sentinels(self) -> tuple[tuple[int, int], tuple[int, int]]:
        """Positions in the legacy encoding where (0, 0) means 'not found'."""
        return to_sentinel(self.left), to_sentinel(self.right)


class TwoHandTracker:
    """
    Drives a left and a right Hand through each frame.

    Usage:
        tracker = TwoHandTracker()

        # Each frame:
        tracker.set_estimate(HandSide.LEFT, point, blob)
        result = tracker.process_frame(skin_mask, blobs, movement_map)
    """

    def __init__(
        self,
        config: Optional[HandTrackerConfig] = None,
        observer: Optional[HandObserver] = None
    ):
        self.config = config or HandTrackerConfig()
        self.left = Hand(HandSide.LEFT, self.config, observer)
        self.right = Hand(HandSide.RIGHT, self.config, observer)
        self._frame_count = 0

        logger.debug(
            f"TwoHandTracker initialized (history={self.config.history_size}, "
            f"px/cm={self.config.pixels_per_cm}, fps={self.config.fps})"
        )

    def hand(self, side: HandSide) -> Hand:
        return self.left if side is HandSide.LEFT else self.right

    def set_estimate(
        self,
        side: HandSide,
        estimate: Point,
        blob: Optional[BlobInformation] = None,
        ignore_intersection: bool = False,
        condition: Condition = Condition.NORMAL
    ) -> bool:
        """Forward an external estimate to one hand. See Hand.set_estimate."""
        return self.hand(side).set_estimate(estimate, blob, ignore_intersection, condition)

    def process_frame(
        self,
        skin_mask: np.ndarray,
        blobs: Sequence[BlobInformation],
        movement_map: np.ndarray
    ) -> FrameResult:
        """
        Resolve both hands for one frame.

        Args:
            skin_mask: Binary skin mask (0/255), read only.
            blobs: Blobs extracted from the skin mask.
            movement_map: Motion-difference mask with the same shape.

        Returns:
            FrameResult with both positions after intersection handling.

        Raises:
            MaskContractError: If the masks are not 2D or differ in shape.
        """
        validate_mask(skin_mask, "skin_mask")
        validate_mask(movement_map, "movement_map")
        validate_same_shape(skin_mask, movement_map, "skin_mask and movement_map")

        self.left.solve(skin_mask, blobs, movement_map)
        self.right.solve(skin_mask, blobs, movement_map)

        self.left.handle_intersection(self.right.position, skin_mask)
        self.right.handle_intersection(self.left.position, skin_mask)

        result = FrameResult(
            frame_index=self._frame_count,
            left=self.left.position,
            right=self.right.position,
            intersecting=self.left.intersecting or self.right.intersecting,
        )
        self._frame_count += 1
        return result

    def reset(self) -> None:
        self.left.reset()
        self.right.reset()
        self._frame_count = 0
        logger.debug("TwoHandTracker reset")

    @property
    def frame_count(self) -> int:
        """Get total number of frames processed."""
        return self._frame_count
