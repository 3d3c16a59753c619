"""
Greedy hill-climb over disc coverage.

The search walks from a start point towards the neighbour with the highest
coverage, using a direction-biased neighbour set per search mode. Only a
strict improvement moves the walker, and every integer position is visited
at most once per call, so the walk cannot oscillate.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from .coverage import MaskContractError, SearchSpace, coverage, validate_mask
from .geometry import Point


class SearchMode(Enum):
    """Neighbour set used by the hill-climb."""
    FREE = auto()          # All 8 compass directions
    SEARCH_LEFT = auto()   # Never step towards -x
    SEARCH_RIGHT = auto()  # Never step towards +x
    SEARCH_UP = auto()     # Never step towards +y
    SEARCH_DOWN = auto()   # Never step towards -y


# Unit offsets in evaluation order; the first of several equal maxima wins.
SEARCH_OFFSETS: dict[SearchMode, tuple[tuple[int, int], ...]] = {
    SearchMode.FREE: (
        (1, 1), (1, -1), (1, 0),
        (-1, 1), (-1, -1), (-1, 0),
        (0, 1), (0, -1),
    ),
    SearchMode.SEARCH_LEFT: ((0, 1), (0, -1), (1, 1), (1, -1), (1, 0)),
    SearchMode.SEARCH_RIGHT: ((0, 1), (0, -1), (-1, 1), (-1, -1), (-1, 0)),
    SearchMode.SEARCH_UP: ((-1, 0), (1, 0), (1, -1), (-1, -1), (0, -1)),
    SearchMode.SEARCH_DOWN: ((-1, 0), (1, 0), (1, 1), (-1, 1), (0, 1)),
}


@dataclass
class SearchResult:
    """
    Outcome of one hill-climb.

    Attributes:
        start: Where the search began.
        point: Best position found.
        coverage: Coverage at `point`.
        iterations: Number of neighbourhood evaluations performed.
        mode: Neighbour set that was used.
        path: Accepted positions in order, starting with `start`.
    """
    start: Point
    point: Point
    coverage: float
    iterations: int
    mode: SearchMode
    path: list[Point] = field(default_factory=list)

    @property
    def moved(self) -> bool:
        return self.point != self.start


def local_search(
    start: Point,
    mask: np.ndarray,
    max_iterations: int,
    step_size: int,
    radius: int,
    mode: SearchMode = SearchMode.FREE
) -> SearchResult:
    """
    Climb the coverage landscape from `start`.

    Args:
        start: Initial position in mask coordinates.
        mask: Binary mask, read only.
        max_iterations: Upper bound on neighbourhood evaluations.
        step_size: Pixel length of each step.
        radius: Disc radius for coverage evaluation.
        mode: Neighbour set to explore.

    Returns:
        SearchResult with the best position found.

    Raises:
        MaskContractError: If the mask is not 2D or step/radius are not positive.
    """
    validate_mask(mask)
    if step_size <= 0:
        raise MaskContractError(f"step_size must be positive, got {step_size}")
    if radius <= 0:
        raise MaskContractError(f"radius must be positive, got {radius}")

    offsets = [(dx * step_size, dy * step_size) for dx, dy in SEARCH_OFFSETS[mode]]

    # One window large enough for every disc the walk can reach
    reach = max(0, max_iterations) * step_size
    space = SearchSpace.extract(mask, start, reach + radius)

    best = space.to_local(start)
    best_value = coverage(best, space.mat, radius)
    visited = {best.key}
    path = [start]

    iterations = 0
    for _ in range(max_iterations):
        iterations += 1

        candidate = None
        candidate_value = 0.0
        for dx, dy in offsets:
            neighbour = best.offset(dx, dy)
            if neighbour.key in visited:
                continue
            value = coverage(neighbour, space.mat, radius)
            if value > candidate_value:
                candidate = neighbour
                candidate_value = value

        if candidate is None or candidate_value <= best_value:
            break

        best = candidate
        best_value = candidate_value
        visited.add(best.key)
        path.append(space.to_global(best))

    return SearchResult(
        start=start,
        point=space.to_global(best),
        coverage=best_value,
        iterations=iterations,
        mode=mode,
        path=path,
    )
