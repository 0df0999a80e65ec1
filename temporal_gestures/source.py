"""
Camera + MediaPipe gesture recognizer frame source.
"""
import asyncio
import logging
import threading
import time
from pathlib import Path
from typing import Optional

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision

from .config import CameraConfig, RecognizerConfig
from .landmarks import to_recognition_result
from .types import RecognitionResult


logger = logging.getLogger(__name__)


class CameraGestureSource:
    """
    Reads webcam frames with OpenCV and classifies them with the MediaPipe
    Tasks GestureRecognizer in VIDEO mode.
    """

    def __init__(self, camera: CameraConfig, recognizer: RecognizerConfig):
        """
        Initialize the source. Nothing is opened until open() is awaited.

        Args:
            camera: Capture device settings
            recognizer: Detection/tracking thresholds for the recognizer
        """
        self.camera_cfg = camera
        self.recognizer_cfg = recognizer
        self.cap: Optional[cv2.VideoCapture] = None
        self.recognizer: Optional[vision.GestureRecognizer] = None

        self._frame: Optional[np.ndarray] = None
        self._frame_time = -1.0
        self._last_timestamp_ms = -1

        # Bumped by close(); an open() started before the close discards its handles
        self._generation = 0
        self._lock = threading.Lock()

    async def open(self, model_asset_path: str, num_hands: int) -> None:
        """Load the model and open the camera without blocking the event loop."""
        await asyncio.to_thread(self._open_blocking, model_asset_path, num_hands, self._generation)

    def _open_blocking(self, model_asset_path: str, num_hands: int, generation: int) -> None:
        model_path = Path(model_asset_path)
        if not model_path.exists():
            raise FileNotFoundError(f"Gesture recognizer model not found: {model_path}")

        options = vision.GestureRecognizerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=num_hands,
            min_hand_detection_confidence=self.recognizer_cfg.min_hand_detection_confidence,
            min_hand_presence_confidence=self.recognizer_cfg.min_hand_presence_confidence,
            min_tracking_confidence=self.recognizer_cfg.min_tracking_confidence,
        )
        recognizer = vision.GestureRecognizer.create_from_options(options)

        cap = cv2.VideoCapture(self.camera_cfg.index)
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.camera_cfg.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.camera_cfg.height)
        cap.set(cv2.CAP_PROP_FPS, self.camera_cfg.fps)
        if not cap.isOpened():
            cap.release()
            recognizer.close()
            raise RuntimeError(f"Failed to open camera {self.camera_cfg.index}")

        with self._lock:
            if generation != self._generation:
                cap.release()
                recognizer.close()
                raise RuntimeError("Frame source was closed while opening")
            self.recognizer = recognizer
            self.cap = cap
        logger.info(f"Opened camera {self.camera_cfg.index} with model {model_path}")

    def frame_time(self) -> float:
        """Grab the next frame; the time only moves when a frame was actually read."""
        if self.cap is None:
            return self._frame_time

        ret, frame = self.cap.read()
        if not ret:
            return self._frame_time

        if self.camera_cfg.mirror:
            frame = cv2.flip(frame, 1)
        self._frame = frame
        self._frame_time = time.perf_counter()
        return self._frame_time

    def recognize(self, timestamp_ms: float) -> RecognitionResult:
        """Run the recognizer on the latest frame."""
        if self.recognizer is None or self._frame is None:
            return RecognitionResult()

        # VIDEO mode requires strictly increasing timestamps
        ts = max(int(timestamp_ms), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = ts

        rgb = cv2.cvtColor(self._frame, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
        return to_recognition_result(self.recognizer.recognize_for_video(image, ts))

    def latest_frame(self) -> Optional[np.ndarray]:
        """Copy of the latest BGR frame, for preview rendering."""
        return None if self._frame is None else self._frame.copy()

    def close(self) -> None:
        """Release the camera and the recognizer, including ones still being opened."""
        with self._lock:
            self._generation += 1
            cap, recognizer = self.cap, self.recognizer
            self.cap = None
            self.recognizer = None
        if cap is not None and cap.isOpened():
            cap.release()
        if recognizer is not None:
            recognizer.close()
        self._frame = None
