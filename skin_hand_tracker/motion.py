"""
Motion prediction from the resolved position history.

Used when the area around the last known position holds no skin: the hand
either jumped or got occluded, so the next position is extrapolated from
the last three resolved points and checked against the current mask.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .coverage import point_quality
from .geometry import Point
from .logger import get_logger

logger = get_logger("MotionPredictor")


def _half(value: int) -> int:
    """Integer halving that truncates toward zero."""
    return int(value / 2)


@dataclass
class MotionPrediction:
    """
    Both extrapolation hypotheses and the accepted result.

    Attributes:
        constant_velocity: p1 + (p1 - p2).
        averaged_velocity: p1 + ((p1 - p2) + (p2 - p3)) / 2.
        constant_velocity_quality: Mask quality of the first hypothesis.
        averaged_velocity_quality: Mask quality of the second hypothesis.
        point: Winning hypothesis if its quality passed the threshold, else None.
    """
    constant_velocity: Point
    averaged_velocity: Point
    constant_velocity_quality: float
    averaged_velocity_quality: float
    point: Optional[Point] = None

    @property
    def best_quality(self) -> float:
        return max(self.constant_velocity_quality, self.averaged_velocity_quality)


def extrapolate(p1: Point, p2: Point, p3: Point) -> tuple[Point, Point]:
    """
    Linear extrapolation one frame ahead.

    Args:
        p1: Newest resolved position.
        p2: Position one frame before p1.
        p3: Position two frames before p1.

    Returns:
        (constant-velocity point, averaged two-step velocity point).
    """
    d1 = p1 - p2
    d2 = p2 - p3
    constant_velocity = p1 + d1
    averaged_velocity = p1.offset(_half(d1.x + d2.x), _half(d1.y + d2.y))
    return constant_velocity, averaged_velocity


def predict_motion(
    recent: Sequence[Optional[Point]],
    mask: np.ndarray,
    radius: int,
    threshold: float
) -> Optional[MotionPrediction]:
    """
    Evaluate both hypotheses against the mask.

    Args:
        recent: History slots, newest first; at least three are used.
        mask: Current skin mask.
        radius: Quality disc radius in pixels.
        threshold: Minimum quality for a usable prediction.

    Returns:
        MotionPrediction (with point=None when both hypotheses are too weak),
        or None when fewer than three valid history points exist.
    """
    if len(recent) < 3 or any(p is None for p in recent[:3]):
        return None

    p1, p2, p3 = recent[0], recent[1], recent[2]
    constant_velocity, averaged_velocity = extrapolate(p1, p2, p3)

    prediction = MotionPrediction(
        constant_velocity=constant_velocity,
        averaged_velocity=averaged_velocity,
        constant_velocity_quality=point_quality(constant_velocity, mask, radius),
        averaged_velocity_quality=point_quality(averaged_velocity, mask, radius),
    )

    if prediction.averaged_velocity_quality > prediction.constant_velocity_quality:
        winner = averaged_velocity
    else:
        winner = constant_velocity

    if prediction.best_quality > threshold:
        prediction.point = winner
    else:
        logger.debug(
            f"No usable prediction (best quality {prediction.best_quality:.3f} "
            f"<= {threshold})"
        )

    return prediction


def predict_position(
    recent: Sequence[Optional[Point]],
    mask: np.ndarray,
    radius: int,
    threshold: float
) -> Optional[Point]:
    """Predicted position, or None if there is no usable prediction."""
    prediction = predict_motion(recent, mask, radius, threshold)
    return prediction.point if prediction else None
