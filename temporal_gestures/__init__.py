"""
Temporal Gesture Recognition

Turns per-frame MediaPipe hand landmarks and static gesture labels into
debounced temporal gestures (point, swipe left/right, click) for UI layers.

The camera source and preview (temporal_gestures.source, temporal_gestures.main)
need OpenCV and MediaPipe at import time and are not imported here.
"""

__version__ = "0.1.0"

from .types import (
    Landmark, RecognizedGesture, RecognitionResult, GestureFrameData,
    SwipeEvent, ClickEvent, PointEvent, GestureEvent,
    FrameSourceProto, ControllerProto,
)
from .config import load_config, Cfg, TemporalConfig, ConfigError
from .controller_mock import MockController, dispatch_gesture
from .gestures import TemporalGestureProcessor, PipelineState, matches
from .service import GestureRecognitionService

__all__ = [
    "Landmark",
    "RecognizedGesture",
    "RecognitionResult",
    "GestureFrameData",
    "SwipeEvent",
    "ClickEvent",
    "PointEvent",
    "GestureEvent",
    "FrameSourceProto",
    "ControllerProto",
    "load_config",
    "Cfg",
    "TemporalConfig",
    "ConfigError",
    "MockController",
    "dispatch_gesture",
    "TemporalGestureProcessor",
    "PipelineState",
    "matches",
    "GestureRecognitionService",
]
