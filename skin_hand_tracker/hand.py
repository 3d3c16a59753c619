"""
Per-hand position resolution.

Each Hand resolves its own position once per frame from the skin mask, the
blob list and the movement mask, then reconciles against the other hand so
that both trackers do not settle on the same region.
"""

from enum import Enum
from typing import Optional, Sequence

import numpy as np

from .blobs import BlobInformation, BlobType, Condition
from .config import (
    AREA_SEARCH_ITERATIONS,
    AREA_SEARCH_STEP_PX,
    BLOB_ARM_HEIGHT_CM,
    BLOB_SHORT_HEIGHT_CM,
    INTERSECT_GENTLE_ITERATIONS,
    INTERSECT_STRONG_ITERATIONS,
    REFINE_ITERATIONS,
    REFINE_STEP_PX,
    HandTrackerConfig,
)
from .coverage import point_quality, validate_mask, validate_same_shape
from .geometry import Point, to_sentinel
from .logger import get_logger
from .motion import predict_motion
from .observer import HandObserver
from .ring_buffer import RingBuffer
from .search import SearchMode, local_search
from .smoothing import midpoint_correction, smooth_position

logger = get_logger("Hand")


class HandSide(Enum):
    """Which of the two tracked hands this is (as seen in the image)."""
    LEFT = "left"
    RIGHT = "right"


class Hand:
    """
    Tracked hand with its own position history.

    A resolve runs in this order: adopt a fresh estimate, re-acquire the
    area around the last position (or a motion prediction), refine by
    coverage, smooth with history, commit to history. The intersection
    check against the other hand runs afterwards, once both hands have
    resolved.

    Attributes:
        side: Left or right hand.
        config: Calibration and tunables.
        position: Resolved position, None while the hand is not found.
        position_history: Resolved positions, newest last pushed.
        blob_estimate: Latest injected estimate.
        blob_history: Blobs that came with injected estimates.
        estimate_updated: A fresh estimate is waiting for the next solve().
        intersecting: Close to the other hand as of the last check.
        ignore_intersect: One-shot override for the next intersection check.
    """

    def __init__(
        self,
        side: HandSide,
        config: Optional[HandTrackerConfig] = None,
        observer: Optional[HandObserver] = None
    ):
        """
        Initialize a hand with empty history.

        Args:
            side: Left or right hand.
            config: Tracker configuration. Uses defaults if None.
            observer: Optional hook receiving intermediate results.
        """
        self.side = side
        self.config = config or HandTrackerConfig()
        self.config.validate()
        self.observer = observer or HandObserver()

        self.position: Optional[Point] = None
        self.position_history: RingBuffer[Point] = RingBuffer(self.config.history_size)
        self.blob_estimate: Optional[Point] = None
        self.blob_history: RingBuffer[BlobInformation] = RingBuffer(self.config.history_size)

        self.estimate_updated = False
        self.intersecting = False
        self.ignore_intersect = False

    @property
    def name(self) -> str:
        return self.side.value

    @property
    def is_left(self) -> bool:
        return self.side is HandSide.LEFT

    @property
    def is_found(self) -> bool:
        return self.position is not None

    @property
    def position_or_sentinel(self) -> tuple[int, int]:
        """Position as (x, y), with (0, 0) meaning 'not found this frame'."""
        return to_sentinel(self.position)

    def reset(self) -> None:
        """Return to the freshly constructed state."""
        self.position = None
        self.position_history.clear()
        self.blob_estimate = None
        self.blob_history.clear()
        self.estimate_updated = False
        self.intersecting = False
        self.ignore_intersect = False
        logger.debug(f"{self.name} hand reset")

    # ------------------------------------------------------------------
    # Estimate injection
    # ------------------------------------------------------------------

    def set_estimate(
        self,
        estimate: Point,
        blob: Optional[BlobInformation] = None,
        ignore_intersection: bool = False,
        condition: Condition = Condition.NORMAL
    ) -> bool:
        """
        Feed a best-guess position from the blob classifier.

        A HIGH blob or an explicit override suppresses the next intersection
        correction. With only a head visible, the estimate is accepted only
        if the hand was last seen at or above the face coverage row.

        Args:
            estimate: Proposed position.
            blob: Blob the estimate came from.
            ignore_intersection: Force the one-shot intersection override.
            condition: Scene condition reported by the classifier.

        Returns:
            True if the estimate was stored for the next solve().
        """
        if (blob is not None and blob.type is BlobType.HIGH) or ignore_intersection:
            self.ignore_intersect = True

        if condition is Condition.ONLY_HEAD:
            threshold = self.config.face_coverage_threshold
            if self.position is None or self.position.y > threshold:
                logger.debug(
                    f"{self.name} hand: rejected head-only estimate {estimate} "
                    f"(last position {self.position})"
                )
                return False

        self.blob_estimate = estimate
        self.blob_history.push(blob)
        self.estimate_updated = True
        return True

    # ------------------------------------------------------------------
    # Per-frame resolve
    # ------------------------------------------------------------------

    def solve(
        self,
        skin_mask: np.ndarray,
        blobs: Sequence[BlobInformation],
        movement_map: np.ndarray
    ) -> Optional[Point]:
        """
        Resolve this frame's position.

        Args:
            skin_mask: Binary skin mask for the current frame.
            blobs: Skin blobs detected in the current frame.
            movement_map: Binary mask of pixels that recently changed.

        Returns:
            The resolved position, or None if the hand is not found.
        """
        validate_mask(skin_mask, "skin_mask")
        validate_mask(movement_map, "movement_map")
        validate_same_shape(skin_mask, movement_map, "skin_mask and movement_map")

        # A fresh estimate is the fallback if every refinement fails
        if self.estimate_updated:
            self.position = self.blob_estimate

        last_position = self.position_history.latest
        if last_position is not None and not self.intersecting:
            searched = self._improve_by_area_search(skin_mask, last_position)
            if not searched:
                predicted = self.predict_position(skin_mask)
                if predicted is not None:
                    self._improve_by_area_search(skin_mask, predicted)

        if self.position is not None:
            mode = self.search_mode_from_blobs(blobs)
            self._improve_by_coverage(skin_mask, mode, REFINE_ITERATIONS, "refine")
            self._improve_using_history(movement_map)

            self.position_history.push(self.position)
            midpoint_correction(self.position_history)

        self.estimate_updated = False
        return self.position

    def _improve_by_area_search(self, skin_mask: np.ndarray, start: Point) -> bool:
        """
        Search the surrounding area of `start` for a hand blob.

        Runs only when there is no fresh estimate or the fresh estimate
        jumped implausibly far, and only if `start` is not an empty area.

        Returns:
            True if the search ran and updated the position.
        """
        if self.position is None:
            distance = float("inf")
        else:
            distance = start.distance_to(self.position)

        if distance <= self.config.max_jump_px and self.estimate_updated:
            return False

        quality = point_quality(start, skin_mask, self.config.quality_radius_px)
        self.observer.on_quality(self, "area", start, quality)
        if quality <= self.config.quality_threshold:
            logger.debug(f"{self.name} hand: empty area at {start} (q={quality:.3f})")
            return False

        result = local_search(
            start,
            skin_mask,
            AREA_SEARCH_ITERATIONS,
            AREA_SEARCH_STEP_PX,
            self.config.area_search_radius_px,
            SearchMode.FREE,
        )
        self.observer.on_search(self, "area", result)
        self.position = result.point
        return True

    def predict_position(self, skin_mask: np.ndarray) -> Optional[Point]:
        """
        Extrapolate the next position from the last three history points.

        Returns:
            Predicted point if it lands on enough skin, otherwise None.
        """
        prediction = predict_motion(
            self.position_history.recent(3),
            skin_mask,
            self.config.quality_radius_px,
            self.config.quality_threshold,
        )
        if prediction is None:
            return None

        self.observer.on_prediction(self, prediction)
        if prediction.point is not None:
            logger.debug(f"{self.name} hand: falling back to predicted {prediction.point}")
        return prediction.point

    def search_mode_from_blobs(self, blobs: Sequence[BlobInformation]) -> SearchMode:
        """
        Choose a refinement direction from the blob under the position.

        Tall blobs usually mean an extended arm, so the search is nudged
        along the arm towards the hand.
        """
        if self.position is None:
            return SearchMode.FREE

        for blob in blobs:
            if not blob.contains(self.position):
                continue

            height = blob.height
            if height < BLOB_SHORT_HEIGHT_CM * self.config.pixels_per_cm:
                return SearchMode.FREE
            if blob.type is BlobType.LOW:
                return SearchMode.SEARCH_DOWN
            if blob.type is BlobType.MEDIUM:
                if height > BLOB_ARM_HEIGHT_CM * self.config.pixels_per_cm:
                    return SearchMode.SEARCH_DOWN
                return SearchMode.FREE
            if blob.type is BlobType.HIGH:
                return SearchMode.SEARCH_UP
            return SearchMode.FREE

        return SearchMode.FREE

    def _improve_by_coverage(
        self,
        skin_mask: np.ndarray,
        mode: SearchMode,
        max_iterations: int,
        label: str
    ) -> None:
        """Walk over the blob to center the disc, biased by `mode`."""
        result = local_search(
            self.position,
            skin_mask,
            max_iterations,
            REFINE_STEP_PX,
            self.config.refine_radius_px,
            mode,
        )
        self.observer.on_search(self, label, result)
        self.position = result.point

    def _improve_using_history(self, movement_map: np.ndarray) -> None:
        movement = point_quality(self.position, movement_map, self.config.movement_radius_px)
        self.observer.on_quality(self, "movement", self.position, movement)
        self.position = smooth_position(
            self.position,
            self.position_history.recent(self.config.smoothing_window),
            movement,
            self.config.smoothing_window,
        )

    # ------------------------------------------------------------------
    # Two-hand reconciliation
    # ------------------------------------------------------------------

    def handle_intersection(
        self, other_position: Optional[Point], skin_mask: np.ndarray
    ) -> Optional[float]:
        """
        Push this hand away from the other hand when they overlap.

        Args:
            other_position: The other hand's resolved position this frame.
            skin_mask: Binary skin mask for the current frame.

        Returns:
            Distance between the hands, or None if either is not found.
        """
        if self.position is None or other_position is None:
            return None

        self.intersecting = False
        minimal_distance = self.config.minimal_distance_px
        distance = max(1.0, self.position.distance_to(other_position))
        mode = SearchMode.SEARCH_LEFT if self.is_left else SearchMode.SEARCH_RIGHT

        if distance < minimal_distance:
            self.intersecting = True
            correction = "strong"
            logger.debug(f"{self.name} hand: intersecting at distance {distance:.1f}")
            self._improve_by_coverage(skin_mask, mode, INTERSECT_STRONG_ITERATIONS, "intersect")
        elif distance < 2 * minimal_distance:
            correction = "gentle"
            self._improve_by_coverage(skin_mask, mode, INTERSECT_GENTLE_ITERATIONS, "intersect")
        else:
            correction = "none"

        self.observer.on_intersection(self, distance, correction)

        if self.ignore_intersect:
            self.intersecting = False
        self.ignore_intersect = False
        return distance

    # ------------------------------------------------------------------
    # Output for renderers
    # ------------------------------------------------------------------

    def trail(self) -> list[Point]:
        """Valid history points, oldest to newest."""
        return [p for p in self.position_history.oldest_to_newest() if p is not None]

    def status_text(self) -> Optional[str]:
        """Message for overlays when the hand is lost, else None."""
        if self.position is not None:
            return None
        return f"{self.name.capitalize()} hand missing."
