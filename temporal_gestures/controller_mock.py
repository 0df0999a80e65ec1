"""
Mock controller implementation for testing temporal gesture events.
"""
import logging
from typing import Literal

from .types import ClickEvent, ControllerProto, GestureEvent, PointEvent, SwipeEvent


logger = logging.getLogger(__name__)


class MockController:
    """Mock controller that logs actions instead of executing them."""

    def __init__(self):
        """Initialize the mock controller."""
        self.swipe_count = 0
        self.click_count = 0
        self.point_count = 0
        self.last_point = None

    def swipe(self, direction: Literal["left", "right"]) -> None:
        """Log swipe instead of executing it."""
        self.swipe_count += 1
        logger.info(f"[MockController] Swipe: direction={direction} (call #{self.swipe_count})")

    def click(self) -> None:
        """Log click instead of executing it."""
        self.click_count += 1
        logger.info(f"[MockController] Click (call #{self.click_count})")

    def point(self, x: float, y: float) -> None:
        """Remember pointer position; logged at debug level since it fires every frame."""
        self.point_count += 1
        self.last_point = (x, y)
        logger.debug(f"[MockController] Point: x={x:.3f}, y={y:.3f}")

    def reset_counters(self) -> None:
        """Reset action counters for testing."""
        self.swipe_count = 0
        self.click_count = 0
        self.point_count = 0
        self.last_point = None


def dispatch_gesture(controller: ControllerProto, event: GestureEvent) -> None:
    """Route a temporal gesture event to the matching controller action."""
    if isinstance(event, SwipeEvent):
        controller.swipe(event.direction)
    elif isinstance(event, ClickEvent):
        controller.click()
    elif isinstance(event, PointEvent):
        controller.point(event.x, event.y)
    else:
        raise TypeError(f"Unknown gesture event: {event!r}")
