#!/usr/bin/env python3
"""
Skin Hand Tracker replay

Runs the two-hand tracker over a directory of pre-computed skin masks and
writes one CSV row of resolved positions per frame. Lost hands are written
as 0,0.

Usage:
    skin-hand-tracker-replay --skin-dir <dir> [--movement-dir <dir>]
        [--profile <path>] [--left-start X,Y] [--right-start X,Y]
        [--output <csv>] [--debug]

Exit Codes:
    0 - Success
    1 - Profile error
    2 - Input error
    3 - Runtime error
"""

import argparse
import csv
import sys
from pathlib import Path
from typing import Optional, TextIO

import cv2
import numpy as np

from .config import (
    EXIT_SUCCESS,
    EXIT_PROFILE_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_RUNTIME_ERROR,
    HandTrackerConfig,
)
from .coverage import MaskContractError
from .geometry import Point
from .hand import HandSide
from .logger import setup_logging, get_logger
from .profile_loader import load_profile, ProfileLoadError
from .tracker import TwoHandTracker

MASK_SUFFIXES = (".png", ".bmp", ".pgm", ".tif", ".tiff")
CSV_HEADER = ["frame", "left_x", "left_y", "right_x", "right_y"]


class InputError(Exception):
    """Raised when mask inputs are missing or unreadable."""
    pass


def parse_point(text: str) -> Point:
    """Parse an 'X,Y' command line value."""
    try:
        x_text, y_text = text.split(",")
        return Point(int(x_text), int(y_text))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {text!r}")


def list_masks(directory: Path) -> list[Path]:
    """
    List mask images in a directory in frame order (sorted by name).

    Raises:
        InputError: If the directory does not exist or holds no masks.
    """
    if not directory.is_dir():
        raise InputError(f"Mask directory not found: {directory}")

    paths = sorted(p for p in directory.iterdir() if p.suffix.lower() in MASK_SUFFIXES)
    if not paths:
        raise InputError(f"No mask images in: {directory}")
    return paths


def read_mask(path: Path) -> np.ndarray:
    """Load a mask as a single-channel image, binarised to 0/255."""
    image = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if image is None:
        raise InputError(f"Cannot read mask image: {path}")
    _, binary = cv2.threshold(image, 0, 255, cv2.THRESH_BINARY)
    return binary


def replay(
    tracker: TwoHandTracker,
    skin_paths: list[Path],
    movement_paths: Optional[list[Path]],
    out: TextIO,
    left_start: Optional[Point] = None,
    right_start: Optional[Point] = None
) -> int:
    """
    Run the tracker over all frames and write CSV rows.

    Without movement masks, each frame's movement map is the absolute
    difference to the previous skin mask.

    Returns:
        Number of frames processed.
    """
    logger = get_logger("Replay")

    if movement_paths is not None and len(movement_paths) != len(skin_paths):
        raise InputError(
            f"Frame count mismatch: {len(skin_paths)} skin masks, "
            f"{len(movement_paths)} movement masks"
        )

    if left_start is not None:
        tracker.set_estimate(HandSide.LEFT, left_start)
    if right_start is not None:
        tracker.set_estimate(HandSide.RIGHT, right_start)

    writer = csv.writer(out)
    writer.writerow(CSV_HEADER)

    previous: Optional[np.ndarray] = None
    for index, skin_path in enumerate(skin_paths):
        skin_mask = read_mask(skin_path)

        if movement_paths is not None:
            movement_map = read_mask(movement_paths[index])
        elif previous is None or previous.shape != skin_mask.shape:
            movement_map = np.zeros_like(skin_mask)
        else:
            movement_map = cv2.absdiff(skin_mask, previous)
        previous = skin_mask

        result = tracker.process_frame(skin_mask, [], movement_map)
        (lx, ly), (rx, ry) = result.as_sentinels()
        writer.writerow([result.frame_index, lx, ly, rx, ry])

        if result.left is None or result.right is None:
            logger.debug(f"Frame {result.frame_index}: left={result.left} right={result.right}")

    return len(skin_paths)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Skin Hand Tracker - replay tracking over recorded masks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0  Success
  1  Profile error (file not found, invalid JSON, invalid values)
  2  Input error (missing or unreadable masks)
  3  Runtime error (unexpected error)

Examples:
  skin-hand-tracker-replay --skin-dir masks/ --left-start 420,300 --right-start 220,300
  skin-hand-tracker-replay --skin-dir masks/ --movement-dir motion/ --profile studio.json
"""
    )

    parser.add_argument(
        "--skin-dir", "-s",
        required=True,
        type=Path,
        help="Directory of binary skin masks, one image per frame"
    )

    parser.add_argument(
        "--movement-dir", "-m",
        type=Path,
        default=None,
        help="Directory of movement masks (default: difference of consecutive skin masks)"
    )

    parser.add_argument(
        "--profile", "-p",
        default=None,
        help="Path to JSON calibration profile"
    )

    parser.add_argument(
        "--left-start",
        type=parse_point,
        default=None,
        help="Initial left hand position as X,Y"
    )

    parser.add_argument(
        "--right-start",
        type=parse_point,
        default=None,
        help="Initial right hand position as X,Y"
    )

    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="CSV output file (default: stdout)"
    )

    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to the console only"
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code.
    """
    args = parse_args(argv)

    logger = setup_logging(debug=args.debug, log_to_file=not args.no_log_file)
    logger.info("Skin Hand Tracker replay starting...")

    config = HandTrackerConfig()
    if args.profile:
        try:
            config = load_profile(args.profile).config
        except ProfileLoadError as e:
            logger.error(f"Failed to load profile: {e}")
            return EXIT_PROFILE_ERROR

    try:
        skin_paths = list_masks(args.skin_dir)
        movement_paths = list_masks(args.movement_dir) if args.movement_dir else None

        tracker = TwoHandTracker(config)
        if args.output:
            with open(args.output, "w", newline="", encoding="utf-8") as out:
                frames = replay(tracker, skin_paths, movement_paths, out,
                                args.left_start, args.right_start)
        else:
            frames = replay(tracker, skin_paths, movement_paths, sys.stdout,
                            args.left_start, args.right_start)

        logger.info(f"Replay finished. Processed {frames} frames")
        return EXIT_SUCCESS

    except (InputError, MaskContractError) as e:
        logger.error(f"Input error: {e}")
        return EXIT_INPUT_ERROR
    except Exception as e:
        logger.exception(f"Runtime error: {e}")
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
