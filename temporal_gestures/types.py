"""
Type definitions for the temporal gesture pipeline.
"""
from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional, Protocol, Union, runtime_checkable


# Static gesture labels produced by the MediaPipe gesture recognizer
OPEN_PALM = "Open_Palm"
CLOSED_FIST = "Closed_Fist"
POINTING_UP = "Pointing_Up"
NONE_LABEL = "None"


def normalize_label(label: Optional[str]) -> Optional[str]:
    """Map the recognizer's "None" category and a missing label to the same value."""
    if label is None or label == NONE_LABEL:
        return None
    return label


@dataclass(frozen=True)
class Landmark:
    """A single normalized landmark, coordinates in [0..1]."""
    x: float
    y: float
    z: Optional[float] = None


# 21 landmarks per detected hand
HandLandmarks = List[Landmark]


@dataclass(frozen=True)
class RecognizedGesture:
    """Single-frame static gesture classification for one hand."""
    category_name: str
    score: float


@dataclass(frozen=True)
class ReferencePoints:
    """Reference points derived from the first hand; any of them may be missing."""
    wrist: Optional[Landmark] = None
    palm_center: Optional[Landmark] = None
    thumb_tip: Optional[Landmark] = None
    index_tip: Optional[Landmark] = None


@dataclass(frozen=True)
class BufferEntry:
    """Smoothed reference points plus the static gesture of one processed frame."""
    points: ReferencePoints
    gesture: Optional[RecognizedGesture]
    timestamp: float

    @property
    def label(self) -> Optional[str]:
        return normalize_label(self.gesture.category_name if self.gesture else None)

    @property
    def score(self) -> float:
        return self.gesture.score if self.gesture else 0.0


@dataclass(frozen=True)
class SmoothedLabel:
    """Output of the majority filter for one buffer position."""
    label: Optional[str]
    confidence: float


@dataclass(frozen=True)
class Block:
    """Contiguous run of buffer positions (inclusive) sharing one smoothed label."""
    label: Optional[str]
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1


@dataclass
class RecognitionResult:
    """Per-frame output of the vision model, one list entry per detected hand."""
    landmarks: List[HandLandmarks] = field(default_factory=list)
    gestures: List[List[RecognizedGesture]] = field(default_factory=list)


@dataclass
class GestureFrameData:
    """Frame data passed to raw frame subscribers on each processed frame."""
    result: RecognitionResult
    landmarks: List[HandLandmarks]
    gestures: List[RecognizedGesture]  # top gesture per hand
    top_gesture: Optional[RecognizedGesture]  # most confident across hands
    timestamp: float  # milliseconds


@dataclass(frozen=True)
class SwipeEvent:
    """Discrete horizontal swipe."""
    direction: Literal["left", "right"]

    @property
    def gesture(self) -> str:
        return f"swipe_{self.direction}"


@dataclass(frozen=True)
class ClickEvent:
    """Discrete click (point, fist, point)."""

    @property
    def gesture(self) -> str:
        return "click"


@dataclass(frozen=True)
class PointEvent:
    """Continuous pointer position, emitted on every pointing frame."""
    x: float
    y: float

    @property
    def gesture(self) -> str:
        return "point"


GestureEvent = Union[SwipeEvent, ClickEvent, PointEvent]

FrameCallback = Callable[[GestureFrameData], None]
GestureCallback = Callable[[GestureEvent], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class FrameSourceProto(Protocol):
    """Abstract protocol for the camera + vision model collaborator."""

    async def open(self, model_asset_path: str, num_hands: int) -> None:
        """Acquire the capture device and load the model."""
        ...

    def frame_time(self) -> float:
        """Timestamp of the latest available video frame; unchanged when no new frame arrived."""
        ...

    def recognize(self, timestamp_ms: float) -> RecognitionResult:
        """Run inference on the latest frame."""
        ...

    def close(self) -> None:
        """Release the capture device and the model."""
        ...


@runtime_checkable
class ControllerProto(Protocol):
    """Abstract protocol for UI layers that consume temporal gestures."""

    def swipe(self, direction: Literal["left", "right"]) -> None:
        ...

    def click(self) -> None:
        ...

    def point(self, x: float, y: float) -> None:
        ...
