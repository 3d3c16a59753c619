"""
Observer hooks for inspecting the tracker's intermediate results.

The tracker core never draws on the masks it reads. Debug tooling that
wants to visualise candidate points, quality values or chosen search modes
subclasses HandObserver and receives the values the core already computed.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from .geometry import Point

if TYPE_CHECKING:
    from .hand import Hand
    from .motion import MotionPrediction
    from .search import SearchResult


class HandObserver:
    """No-op base observer. Override the hooks you need."""

    def on_quality(self, hand: "Hand", label: str, point: Point, quality: float) -> None:
        pass

    def on_search(self, hand: "Hand", label: str, result: "SearchResult") -> None:
        pass

    def on_prediction(self, hand: "Hand", prediction: "MotionPrediction") -> None:
        pass

    def on_intersection(self, hand: "Hand", distance: float, correction: str) -> None:
        pass


@dataclass
class ObserverEvent:
    """Single recorded observer callback."""
    kind: str
    hand: str
    label: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)


class RecordingObserver(HandObserver):
    """Observer that keeps every callback as an ObserverEvent."""

    def __init__(self):
        self.events: list[ObserverEvent] = []

    def on_quality(self, hand, label, point, quality):
        self.events.append(ObserverEvent(
            "quality", hand.name, label, {"point": point, "quality": quality}
        ))

    def on_search(self, hand, label, result):
        self.events.append(ObserverEvent(
            "search", hand.name, label, {"result": result}
        ))

    def on_prediction(self, hand, prediction):
        self.events.append(ObserverEvent(
            "prediction", hand.name, None, {"prediction": prediction}
        ))

    def on_intersection(self, hand, distance, correction):
        self.events.append(ObserverEvent(
            "intersection", hand.name, correction, {"distance": distance}
        ))

    def of_kind(self, kind: str) -> list[ObserverEvent]:
        return [event for event in self.events if event.kind == kind]

    def clear(self) -> None:
        self.events.clear()
