"""
Temporal smoothing of resolved hand positions.

Blends the raw per-frame estimate with a short moving average of the
history. The blend weight depends on how much motion the movement mask
shows at the current position:
- Static hand = snap to the average (removes jitter)
- Fast movement = keep the raw estimate (removes lag)
"""

from typing import Optional, Sequence

from .config import BLEND_TABLE
from .geometry import Point
from .ring_buffer import RingBuffer


def average_weight(movement_coverage: float) -> float:
    """
    Weight placed on the history average for a given movement coverage.

    Args:
        movement_coverage: Fraction of the movement disc that changed.

    Returns:
        Weight in [0, 1]; the raw position gets the remainder.
    """
    for upper_bound, weight in BLEND_TABLE:
        if movement_coverage < upper_bound:
            return weight
    return 0.0


def history_average(
    recent: Sequence[Optional[Point]], window: int
) -> Optional[tuple[float, float]]:
    """
    Mean of the newest `window` history slots.

    Returns:
        (x, y) average, or None if any slot in the window is empty.
    """
    points = list(recent[:window])
    if len(points) < window or any(p is None for p in points):
        return None

    avg_x = sum(p.x for p in points) / window
    avg_y = sum(p.y for p in points) / window
    return (avg_x, avg_y)


def blend(position: Point, average: tuple[float, float], weight: float) -> Point:
    """Weighted mix of the average and the raw position, rounded to pixels."""
    x = weight * average[0] + (1.0 - weight) * position.x
    y = weight * average[1] + (1.0 - weight) * position.y
    return Point(int(round(x)), int(round(y)))


def smooth_position(
    position: Point,
    recent: Sequence[Optional[Point]],
    movement_coverage: float,
    window: int
) -> Point:
    """
    Apply history smoothing to a raw position.

    Args:
        position: Raw estimate for this frame.
        recent: History slots, newest first (not yet containing `position`).
        movement_coverage: Motion coverage at `position`.
        window: Number of history points to average.

    Returns:
        Smoothed position, or `position` unchanged when history is incomplete.
    """
    average = history_average(recent, window)
    if average is None:
        return position

    weight = average_weight(movement_coverage)
    if weight == 0.0:
        return position
    return blend(position, average, weight)


def midpoint_correction(history: RingBuffer[Point]) -> bool:
    """
    Replace the second newest history point with the midpoint of its neighbours.

    This de-jitters the trail one frame behind the present.

    Returns:
        True if the correction was applied (three newest slots filled).
    """
    newest, previous, older = history.recent(3)
    if newest is None or previous is None or older is None:
        return False

    midpoint = Point(
        int(round(0.5 * (newest.x + older.x))),
        int(round(0.5 * (newest.y + older.y))),
    )
    history.replace_nth_most_recent(1, midpoint)
    return True
