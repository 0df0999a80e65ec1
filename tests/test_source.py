"""
Test cases for the camera frame source that need no camera or model file.
"""
import os
import tempfile
import unittest
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from temporal_gestures.config import CameraConfig, RecognizerConfig
from temporal_gestures.source import CameraGestureSource
from temporal_gestures.types import FrameSourceProto, RecognitionResult


class TestCameraGestureSource(unittest.IsolatedAsyncioTestCase):
    """Test behaviour of an unopened source."""

    def setUp(self):
        self.source = CameraGestureSource(CameraConfig(), RecognizerConfig())

    def test_implements_protocol(self):
        self.assertIsInstance(self.source, FrameSourceProto)

    async def test_missing_model(self):
        with self.assertRaises(FileNotFoundError):
            await self.source.open("/nonexistent/gesture_recognizer.task", 2)
        self.assertIsNone(self.source.cap)

    def test_unopened_source_has_no_frames(self):
        self.assertEqual(self.source.frame_time(), self.source.frame_time())
        self.assertEqual(self.source.recognize(0.0), RecognitionResult())
        self.assertIsNone(self.source.latest_frame())

    def test_close_without_open(self):
        self.source.close()
        self.source.close()
        self.assertIsNone(self.source.recognizer)


class TestOpenReleasesHandles(unittest.TestCase):
    """Test that camera and recognizer handles never outlive a failed or abandoned open."""

    def setUp(self):
        fd, self.model_path = tempfile.mkstemp(suffix=".task")
        os.close(fd)
        self.addCleanup(os.remove, self.model_path)
        self.source = CameraGestureSource(CameraConfig(), RecognizerConfig())
        self.cap = MagicMock()
        self.recognizer = MagicMock()

    def _open(self, generation: int) -> None:
        with patch("temporal_gestures.source.vision.GestureRecognizerOptions"), \
                patch("temporal_gestures.source.vision.GestureRecognizer.create_from_options",
                      return_value=self.recognizer), \
                patch("temporal_gestures.source.cv2.VideoCapture", return_value=self.cap):
            self.source._open_blocking(self.model_path, 2, generation)

    def test_successful_open(self):
        self.cap.isOpened.return_value = True
        self._open(self.source._generation)

        self.assertIs(self.source.cap, self.cap)
        self.assertIs(self.source.recognizer, self.recognizer)

        self.source.close()
        self.cap.release.assert_called_once()
        self.recognizer.close.assert_called_once()
        self.assertIsNone(self.source.cap)

    def test_camera_failure_releases_capture(self):
        self.cap.isOpened.return_value = False

        with self.assertRaises(RuntimeError):
            self._open(self.source._generation)

        self.cap.release.assert_called_once()
        self.recognizer.close.assert_called_once()
        self.assertIsNone(self.source.cap)

    def test_close_during_open_discards_handles(self):
        self.cap.isOpened.return_value = True
        generation = self.source._generation
        self.source.close()

        with self.assertRaises(RuntimeError):
            self._open(generation)

        self.cap.release.assert_called_once()
        self.recognizer.close.assert_called_once()
        self.assertIsNone(self.source.cap)
        self.assertIsNone(self.source.recognizer)


if __name__ == '__main__':
    unittest.main()
