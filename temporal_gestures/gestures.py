"""
Temporal gesture recognition: turns buffered static gestures into swipe,
click and point events.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .buffer import SlidingBuffer
from .config import TemporalConfig
from .filters import sliding_majority_filter
from .landmarks import compute_reference_points
from .segmentation import segment
from .smoothing import SmoothingState, smooth_reference_points
from .types import (
    Block, BufferEntry, ClickEvent, GestureEvent, GestureFrameData, PointEvent,
    ReferencePoints, SwipeEvent, CLOSED_FIST, OPEN_PALM, POINTING_UP, normalize_label,
)


logger = logging.getLogger(__name__)


def matches(blocks: Sequence[Block], pattern: Sequence[Optional[str]]) -> bool:
    """
    Check whether the last blocks spell out the pattern exactly.

    The match is anchored at the final block: any block after the pattern
    makes it fail.

    Args:
        blocks: Blocks of one buffer snapshot, in order
        pattern: Expected labels, oldest first

    Returns:
        True if the trailing len(pattern) blocks carry the pattern's labels
    """
    if not pattern or len(blocks) < len(pattern):
        return False

    for k in range(len(pattern) - 1, -1, -1):
        block = blocks[len(blocks) - (len(pattern) - k)]
        if normalize_label(block.label) != normalize_label(pattern[k]):
            return False
    return True


class SwipeGesture:
    """
    Open palm closing into a fist while the hand travels sideways.

    The travel is measured on the smoothed palm center, from the first frame
    of the fist block to the newest frame. Positive x travel is reported as
    swipe_left, negative as swipe_right.
    """

    pattern = [OPEN_PALM, CLOSED_FIST]

    def __init__(self, cfg: TemporalConfig):
        self.cfg = cfg

    def detect(self, blocks: Sequence[Block], buffer: SlidingBuffer) -> Tuple[bool, Optional[SwipeEvent]]:
        """
        Returns:
            (structural match, event); a match without enough travel gives no event
        """
        if not matches(blocks, self.pattern):
            return False, None

        first = buffer[blocks[-1].start].points.palm_center
        last = buffer[len(buffer) - 1].points.palm_center
        if first is None or last is None:
            return True, None

        delta_x = last.x - first.x
        if delta_x > self.cfg.swipe_min_dx:
            return True, SwipeEvent(direction="left")
        if delta_x < -self.cfg.swipe_min_dx:
            return True, SwipeEvent(direction="right")
        return True, None


class ClickGesture:
    """Pointing, closing into a fist, pointing again."""

    pattern = [POINTING_UP, CLOSED_FIST, POINTING_UP]

    def detect(self, blocks: Sequence[Block]) -> Optional[ClickEvent]:
        if matches(blocks, self.pattern):
            return ClickEvent()
        return None


class PointGesture:
    """Continuous pointer driven by the palm center while the top gesture is pointing up."""

    def __init__(self, cfg: TemporalConfig):
        self.cfg = cfg

    def detect(self, frame: GestureFrameData, points: ReferencePoints) -> Optional[PointEvent]:
        top = frame.top_gesture
        if top is None or top.category_name != POINTING_UP or points.palm_center is None:
            return None
        return PointEvent(
            x=points.palm_center.x,
            y=points.palm_center.y - self.cfg.point_y_offset,
        )


@dataclass(frozen=True)
class PipelineState:
    """Everything carried from one frame to the next."""
    buffer: SlidingBuffer
    smoothing: SmoothingState = field(default_factory=SmoothingState)

    @classmethod
    def initial(cls, cfg: TemporalConfig) -> "PipelineState":
        return cls(buffer=SlidingBuffer(cfg.buffer_size))


class TemporalGestureProcessor:
    """
    Runs one frame through extraction, smoothing, buffering, segmentation
    and matching.

    The processor holds only configuration; the buffer and smoothing state
    are passed in and returned, so each step is a pure function of its input.
    """

    def __init__(self, cfg: TemporalConfig):
        self.configure(cfg)

    def configure(self, cfg: TemporalConfig) -> None:
        """Swap configuration; applies from the next processed frame."""
        self.cfg = cfg
        self.swipe_gesture = SwipeGesture(cfg)
        self.click_gesture = ClickGesture()
        self.point_gesture = PointGesture(cfg)

    def blocks_for(self, buffer: SlidingBuffer) -> List[Block]:
        """Majority filter + segmentation of a buffer snapshot."""
        labels = sliding_majority_filter(buffer.entries, self.cfg.majority_window_size)
        return segment(labels, self.cfg.max_gap_size)

    def process_frame(self, frame: GestureFrameData,
                      state: PipelineState) -> Tuple[List[GestureEvent], PipelineState]:
        """
        Process a frame and return the events to dispatch, in order.

        A point event (if any) comes first; a swipe or click comes last and
        leaves the returned buffer empty.

        Args:
            frame: Frame data of the newest frame
            state: State returned for the previous frame

        Returns:
            Tuple of (events, next state)
        """
        events: List[GestureEvent] = []

        first_hand = frame.landmarks[0] if frame.landmarks else None
        points, smoothing = smooth_reference_points(
            compute_reference_points(first_hand), state.smoothing, self.cfg.ema_alpha
        )

        point = self.point_gesture.detect(frame, points)
        if point is not None:
            events.append(point)

        buffer = state.buffer.resize(self.cfg.buffer_size).append(
            BufferEntry(points=points, gesture=frame.top_gesture, timestamp=frame.timestamp)
        )

        discrete = self._detect_discrete(buffer)
        if discrete is not None:
            logger.debug(f"Temporal gesture {discrete.gesture} after {len(buffer)} frames")
            events.append(discrete)
            buffer = buffer.clear()

        return events, PipelineState(buffer=buffer, smoothing=smoothing)

    def _detect_discrete(self, buffer: SlidingBuffer) -> Optional[GestureEvent]:
        blocks = self.blocks_for(buffer)

        # Swipe is checked before click
        matched, swipe = self.swipe_gesture.detect(blocks, buffer)
        if matched:
            return swipe
        return self.click_gesture.detect(blocks)
