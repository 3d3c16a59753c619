"""
Profile loader for SkinHandTracker.

Loads and validates JSON calibration profiles. Profile properties use
camelCase, e.g.:

    {"name": "studio", "pixelsPerCm": 3.2, "fps": 25, "historySize": 30}
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config import HandTrackerConfig
from .logger import get_logger

logger = get_logger("ProfileLoader")

# camelCase profile key -> (HandTrackerConfig field, accepted type)
PROFILE_FIELDS: dict[str, tuple[str, type]] = {
    "historySize": ("history_size", int),
    "maxVelocityCmPerSec": ("max_velocity_cm_s", float),
    "pixelsPerCm": ("pixels_per_cm", float),
    "fps": ("fps", float),
    "faceCoverageThreshold": ("face_coverage_threshold", int),
    "qualityThreshold": ("quality_threshold", float),
    "smoothingWindow": ("smoothing_window", int),
    "movementRadiusPx": ("movement_radius_px", int),
}


@dataclass
class TrackerProfile:
    """
    Profile configuration loaded from JSON.

    Attributes:
        name: Profile display name.
        config: Tracker configuration built from the profile values.
    """
    name: str = "default"
    config: HandTrackerConfig = field(default_factory=HandTrackerConfig)


class ProfileLoadError(Exception):
    """Raised when profile loading or validation fails."""
    pass


def load_profile(profile_path: str | Path) -> TrackerProfile:
    """
    Load and validate a profile from a JSON file.

    Args:
        profile_path: Path to the JSON profile file.

    Returns:
        Validated TrackerProfile instance.

    Raises:
        ProfileLoadError: If file cannot be read or validation fails.
    """
    path = Path(profile_path)
    logger.info(f"Loading profile from: {path}")

    if not path.exists():
        raise ProfileLoadError(f"Profile file not found: {path}")

    if not path.is_file():
        raise ProfileLoadError(f"Profile path is not a file: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ProfileLoadError(f"Invalid JSON in profile: {e}")
    except IOError as e:
        raise ProfileLoadError(f"Cannot read profile file: {e}")

    return parse_profile(data)


def _coerce(key: str, value: Any, expected: type) -> Any:
    # bool is an int subclass, but never a valid calibration value
    if isinstance(value, bool):
        raise ProfileLoadError(f"Profile field {key} must be a number, got {value!r}")
    if expected is int:
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ProfileLoadError(f"Profile field {key} must be an integer, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    raise ProfileLoadError(f"Profile field {key} must be a number, got {value!r}")


def parse_profile(data: dict[str, Any]) -> TrackerProfile:
    """
    Parse and validate profile data from dictionary.

    Args:
        data: Dictionary with camelCase profile properties.

    Returns:
        Validated TrackerProfile instance.

    Raises:
        ProfileLoadError: If fields have the wrong type or invalid values.
    """
    if not isinstance(data, dict):
        raise ProfileLoadError(f"Profile must be a JSON object, got {type(data).__name__}")

    config = HandTrackerConfig()
    for key, (attribute, expected) in PROFILE_FIELDS.items():
        if key not in data:
            logger.debug(f"Using default for {key}: {getattr(config, attribute)}")
            continue
        setattr(config, attribute, _coerce(key, data[key], expected))

    unknown = sorted(set(data) - set(PROFILE_FIELDS) - {"name"})
    if unknown:
        logger.warning(f"Ignoring unknown profile field(s): {', '.join(unknown)}")

    try:
        config.validate()
    except ValueError as e:
        raise ProfileLoadError(f"Invalid profile: {e}")

    profile = TrackerProfile(name=str(data.get("name", "default")), config=config)
    logger.info(
        f"Profile loaded: {profile.name} (px/cm={config.pixels_per_cm}, "
        f"fps={config.fps}, history={config.history_size})"
    )
    return profile
