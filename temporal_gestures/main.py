"""
Main application for temporal gesture recognition.
"""
import asyncio
import logging
import os
import sys
from typing import Optional

import cv2
from dotenv import load_dotenv

from .config import load_config
from .controller_mock import MockController, dispatch_gesture
from .landmarks import palm_center
from .overlay import draw_landmarks, draw_palm_center, draw_status
from .service import GestureRecognitionService
from .source import CameraGestureSource
from .types import GestureEvent, PointEvent


logger = logging.getLogger(__name__)


class GestureRecognitionApp:
    """Main application class: camera source, gesture service, mock controller and preview."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.source = CameraGestureSource(self.config.camera, self.config.recognizer)
        self.service = GestureRecognitionService(self.source, self.config)
        self.controller = MockController()
        self.last_gesture: Optional[str] = None

        self.service.subscribe_temporal(self._on_gesture)

    def _on_gesture(self, event: GestureEvent) -> None:
        dispatch_gesture(self.controller, event)
        if not isinstance(event, PointEvent):
            self.last_gesture = event.gesture
            logger.info(f"🎯 {event.gesture}")

    async def run(self) -> int:
        """Run the main application loop."""
        logger.info(f"Starting {self.config.display.window_name}")
        logger.info("  - Open Palm -> Closed Fist + sideways motion = Swipe")
        logger.info("  - Pointing Up -> Closed Fist -> Pointing Up = Click")
        logger.info("  - Pointing Up = Point")

        if not await self.service.start():
            return 1

        try:
            while self.service.is_ready():
                if self.config.display.show_window and not self._render():
                    break
                await asyncio.sleep(self.service.loop_interval_s)
        finally:
            self.service.destroy()
            if self.config.display.show_window:
                cv2.destroyAllWindows()

        return 0

    def _render(self) -> bool:
        """Draw the preview window. Returns False when the user asked to quit."""
        frame = self.source.latest_frame()
        if frame is None:
            return True

        data = self.service.get_current_frame_data()
        top_label = None
        if data is not None:
            if self.config.display.show_landmarks:
                draw_landmarks(frame, data.landmarks)
            if self.config.display.show_palm_center and data.landmarks:
                center = palm_center(data.landmarks[0])
                if center is not None:
                    draw_palm_center(frame, center)
            if data.top_gesture is not None:
                top_label = data.top_gesture.category_name

        draw_status(frame, top_label, self.last_gesture)
        cv2.imshow(self.config.display.window_name, frame)
        return cv2.waitKey(1) & 0xFF != ord('q')


def configure_logging(level_name: str) -> int:
    """
    Configure root logging from a level name.

    Unknown names fall back to INFO with a warning.

    Returns:
        The numeric level in effect
    """
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        logging.basicConfig(level=logging.INFO)
        logger.warning(f"⚠️ Unknown log level {level_name!r}, using INFO")
        return logging.INFO

    logging.basicConfig(level=level)
    return level


def main() -> int:
    """Entry point for the application."""
    load_dotenv()

    config_path = os.getenv("TEMPORAL_GESTURES_CONFIG")
    if len(sys.argv) > 1:
        config_path = sys.argv[1]

    app = GestureRecognitionApp(config_path)

    configure_logging(os.getenv("TEMPORAL_GESTURES_LOG_LEVEL", app.config.logging.level))

    try:
        return asyncio.run(app.run())
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
