"""
Disc coverage of binary masks.

Coverage is the fraction of a filled disc that lands on non-zero mask
pixels. All evaluation happens on a zero-padded window ("search space")
cut out around the point, so discs that leave the image are handled
without special cases: pixels outside the mask count as off.
"""

from dataclasses import dataclass
from functools import lru_cache

import cv2
import numpy as np

from .geometry import Point


class MaskContractError(ValueError):
    """Raised when a mask or search parameter violates the input contract."""
    pass


def validate_mask(mask: np.ndarray, name: str = "mask") -> None:
    """
    Check that a mask is a single-channel 2D array.

    Raises:
        MaskContractError: If the mask is not a 2D numpy array.
    """
    if not isinstance(mask, np.ndarray):
        raise MaskContractError(f"{name} must be a numpy array, got {type(mask).__name__}")
    if mask.ndim != 2:
        raise MaskContractError(f"{name} must be single-channel 2D, got shape {mask.shape}")


def validate_same_shape(first: np.ndarray, second: np.ndarray, names: str = "masks") -> None:
    if first.shape != second.shape:
        raise MaskContractError(f"{names} differ in shape: {first.shape} vs {second.shape}")


def _validate_radius(radius: int) -> None:
    if radius <= 0:
        raise MaskContractError(f"radius must be positive, got {radius}")


@lru_cache(maxsize=64)
def disc_kernel(radius: int) -> np.ndarray:
    """
    Boolean filled disc of side 2 * radius + 1, rasterised by OpenCV.

    The returned array is shared between callers and marked read-only.
    """
    _validate_radius(radius)
    size = 2 * radius + 1
    canvas = np.zeros((size, size), dtype=np.uint8)
    cv2.circle(canvas, (radius, radius), radius, 255, thickness=-1)
    kernel = canvas > 0
    kernel.setflags(write=False)
    return kernel


@dataclass
class SearchSpace:
    """
    Zero-padded square window of a mask.

    Attributes:
        mat: Window contents (a copy, never a view on the source mask).
        x: Column of the window origin in mask coordinates.
        y: Row of the window origin in mask coordinates.
    """
    mat: np.ndarray
    x: int
    y: int

    @classmethod
    def extract(cls, mask: np.ndarray, center: Point, half_size: int) -> "SearchSpace":
        """
        Cut a (2 * half_size + 1)^2 window centred on `center`.

        Args:
            mask: Source mask, read only.
            center: Window centre in mask coordinates.
            half_size: Distance from the centre to each window edge.

        Returns:
            SearchSpace whose out-of-bounds pixels are zero.
        """
        size = 2 * half_size + 1
        x0 = center.x - half_size
        y0 = center.y - half_size
        window = np.zeros((size, size), dtype=mask.dtype)

        rows, cols = mask.shape
        src_x0, src_y0 = max(x0, 0), max(y0, 0)
        src_x1, src_y1 = min(x0 + size, cols), min(y0 + size, rows)
        if src_x0 < src_x1 and src_y0 < src_y1:
            window[src_y0 - y0:src_y1 - y0, src_x0 - x0:src_x1 - x0] = \
                mask[src_y0:src_y1, src_x0:src_x1]

        return cls(mat=window, x=x0, y=y0)

    def to_local(self, point: Point) -> Point:
        return Point(point.x - self.x, point.y - self.y)

    def to_global(self, point: Point) -> Point:
        return Point(point.x + self.x, point.y + self.y)


def coverage(point: Point, mask: np.ndarray, radius: int) -> float:
    """
    Fraction of the disc around point that is on in mask.

    Args:
        point: Disc centre in mask coordinates.
        mask: Binary mask (any non-zero value counts as on).
        radius: Disc radius in pixels.

    Returns:
        Value in [0, 1]; 0 when the disc lies entirely outside the mask.
    """
    validate_mask(mask)
    kernel = disc_kernel(radius)
    window = SearchSpace.extract(mask, point, radius).mat
    on_pixels = np.count_nonzero(window[kernel])
    return on_pixels / np.count_nonzero(kernel)


def point_quality(point: Point, mask: np.ndarray, radius: int) -> float:
    """Coverage evaluated in a local search space of twice the radius."""
    validate_mask(mask)
    _validate_radius(radius)
    space = SearchSpace.extract(mask, point, 2 * radius)
    return coverage(space.to_local(point), space.mat, radius)
