"""
Test cases for the mock controller and event dispatch.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from temporal_gestures.controller_mock import MockController, dispatch_gesture
from temporal_gestures.types import ClickEvent, ControllerProto, PointEvent, SwipeEvent


class TestMockController(unittest.TestCase):
    """Test that events reach the right controller action."""

    def setUp(self):
        self.controller = MockController()

    def test_implements_protocol(self):
        self.assertIsInstance(self.controller, ControllerProto)

    def test_dispatch(self):
        dispatch_gesture(self.controller, SwipeEvent(direction="left"))
        dispatch_gesture(self.controller, SwipeEvent(direction="right"))
        dispatch_gesture(self.controller, ClickEvent())
        dispatch_gesture(self.controller, PointEvent(x=0.25, y=0.5))

        self.assertEqual(self.controller.swipe_count, 2)
        self.assertEqual(self.controller.click_count, 1)
        self.assertEqual(self.controller.point_count, 1)
        self.assertEqual(self.controller.last_point, (0.25, 0.5))

    def test_swipe_is_logged(self):
        with self.assertLogs("temporal_gestures.controller_mock", level="INFO") as logs:
            dispatch_gesture(self.controller, SwipeEvent(direction="left"))
        self.assertIn("direction=left", logs.output[0])

    def test_reset_counters(self):
        dispatch_gesture(self.controller, ClickEvent())
        self.controller.reset_counters()

        self.assertEqual(self.controller.click_count, 0)
        self.assertIsNone(self.controller.last_point)

    def test_unknown_event(self):
        with self.assertRaises(TypeError):
            dispatch_gesture(self.controller, "click")


if __name__ == '__main__':
    unittest.main()
