"""
Configuration constants for SkinHandTracker.

This module contains all tunable parameters for calibration, area search,
coverage refinement, motion prediction, temporal smoothing and two-hand
intersection handling.
"""

from dataclasses import dataclass
from typing import Final


# Calibration
HISTORY_SIZE: Final[int] = 20  # Resolved positions kept per hand
MAX_VELOCITY_CM_S: Final[float] = 300.0  # Max plausible hand velocity
PIXELS_PER_CM: Final[float] = 4.0  # Image scale at the tracked person
FRAMES_PER_SECOND: Final[float] = 30.0
FACE_COVERAGE_THRESHOLD: Final[int] = 200  # Image row; ONLY_HEAD estimates need the hand at or above it

# Coverage quality gate
QUALITY_THRESHOLD: Final[float] = 0.2  # About 20% of the disc must be skin
QUALITY_RADIUS_CM: Final[float] = 5.0

# Area search (re-acquisition around the last known position)
AREA_SEARCH_ITERATIONS: Final[int] = 10
AREA_SEARCH_STEP_PX: Final[int] = 4
AREA_SEARCH_RADIUS_CM: Final[float] = 8.5

# Coverage refinement (centering the estimate within the blob)
REFINE_ITERATIONS: Final[int] = 5
REFINE_STEP_PX: Final[int] = 3
REFINE_RADIUS_CM: Final[float] = 5.0

# Blob geometry used to bias the refinement direction
BLOB_SHORT_HEIGHT_CM: Final[float] = 15.0  # Below this the blob is just a hand
BLOB_ARM_HEIGHT_CM: Final[float] = 40.0  # MEDIUM blobs above this are extended arms

# Two-hand intersection
INTERSECT_DISTANCE_CM: Final[float] = 8.0
INTERSECT_STRONG_ITERATIONS: Final[int] = 20
INTERSECT_GENTLE_ITERATIONS: Final[int] = 5

# Temporal smoothing
SMOOTHING_WINDOW: Final[int] = 5  # Must not exceed HISTORY_SIZE
MOVEMENT_RADIUS_PX: Final[int] = 30
# (movement coverage upper bound, weight on history average)
BLEND_TABLE: Final[tuple[tuple[float, float], ...]] = (
    (0.001, 0.95),  # Static hand: snap to the average
    (0.05, 0.80),
    (0.20, 0.50),
)

# Logging
LOG_FILENAME: Final[str] = "skin_hand_tracker.log"
LOG_MAX_BYTES: Final[int] = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT: Final[int] = 3

# Exit codes
EXIT_SUCCESS: Final[int] = 0
EXIT_PROFILE_ERROR: Final[int] = 1
EXIT_INPUT_ERROR: Final[int] = 2
EXIT_RUNTIME_ERROR: Final[int] = 3


@dataclass
class HandTrackerConfig:
    """Container for per-hand tunables and calibration."""

    history_size: int = HISTORY_SIZE
    max_velocity_cm_s: float = MAX_VELOCITY_CM_S
    pixels_per_cm: float = PIXELS_PER_CM
    fps: float = FRAMES_PER_SECOND
    face_coverage_threshold: int = FACE_COVERAGE_THRESHOLD
    quality_threshold: float = QUALITY_THRESHOLD
    smoothing_window: int = SMOOTHING_WINDOW
    movement_radius_px: int = MOVEMENT_RADIUS_PX

    def validate(self) -> None:
        """
        Check that the configuration is usable.

        Raises:
            ValueError: If calibration values are not positive or the
                history cannot hold a full smoothing window.
        """
        if self.pixels_per_cm <= 0:
            raise ValueError(f"pixels_per_cm must be positive, got {self.pixels_per_cm}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.max_velocity_cm_s <= 0:
            raise ValueError(f"max_velocity_cm_s must be positive, got {self.max_velocity_cm_s}")
        if self.smoothing_window < 1:
            raise ValueError(f"smoothing_window must be at least 1, got {self.smoothing_window}")
        if self.history_size < max(3, self.smoothing_window):
            raise ValueError(
                f"history_size must be at least {max(3, self.smoothing_window)}, "
                f"got {self.history_size}"
            )
        if self.movement_radius_px <= 0:
            raise ValueError(f"movement_radius_px must be positive, got {self.movement_radius_px}")

    def radius_px(self, centimeters: float) -> int:
        """Convert a length in cm to whole pixels (at least 1)."""
        return max(1, int(centimeters * self.pixels_per_cm))

    @property
    def max_jump_px(self) -> float:
        """Largest plausible displacement between two consecutive frames."""
        return 2 * self.max_velocity_cm_s * self.pixels_per_cm / self.fps

    @property
    def minimal_distance_px(self) -> int:
        """Separation below which the two hands are intersecting."""
        return int(INTERSECT_DISTANCE_CM * self.pixels_per_cm)

    @property
    def quality_radius_px(self) -> int:
        return self.radius_px(QUALITY_RADIUS_CM)

    @property
    def area_search_radius_px(self) -> int:
        return self.radius_px(AREA_SEARCH_RADIUS_CM)

    @property
    def refine_radius_px(self) -> int:
        return self.radius_px(REFINE_RADIUS_CM)
