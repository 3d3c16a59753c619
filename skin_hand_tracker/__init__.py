"""
SkinHandTracker - two-hand position tracking on binary skin masks.

Resolves each hand's image position per frame by hill-climbing disc
coverage over the skin mask, with motion prediction, temporal smoothing
and two-hand intersection avoidance.
"""

__version__ = "1.0.0"
__author__ = "SkinHandTracker Team"

from .blobs import BlobInformation, BlobType, Condition
from .config import HandTrackerConfig
from .coverage import MaskContractError, coverage, point_quality
from .geometry import Point, from_sentinel, to_sentinel
from .hand import Hand, HandSide
from .motion import MotionPrediction, predict_position
from .observer import HandObserver, RecordingObserver
from .profile_loader import TrackerProfile, ProfileLoadError, load_profile
from .ring_buffer import RingBuffer
from .search import SearchMode, SearchResult, local_search
from .tracker import FrameResult, TwoHandTracker

__all__ = [
    "BlobInformation",
    "BlobType",
    "Condition",
    "HandTrackerConfig",
    "MaskContractError",
    "coverage",
    "point_quality",
    "Point",
    "from_sentinel",
    "to_sentinel",
    "Hand",
    "HandSide",
    "MotionPrediction",
    "predict_position",
    "HandObserver",
    "RecordingObserver",
    "TrackerProfile",
    "ProfileLoadError",
    "load_profile",
    "RingBuffer",
    "SearchMode",
    "SearchResult",
    "local_search",
    "FrameResult",
    "TwoHandTracker",
]
