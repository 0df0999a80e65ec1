"""
Gesture recognition service: runs the frame loop once and fans results out
to any number of subscribers.
"""
import asyncio
import logging
import time
from dataclasses import replace
from typing import Any, Callable, List, Optional

from .config import Cfg, RecognizerConfig, TemporalConfig
from .gestures import PipelineState, TemporalGestureProcessor
from .landmarks import select_top_gesture, top_gestures_per_hand
from .types import (
    FrameCallback, FrameSourceProto, GestureCallback, GestureEvent,
    GestureFrameData, RecognitionResult, Unsubscribe,
)


logger = logging.getLogger(__name__)

RECOGNIZER_OPTIONS = {"model_asset_path", "num_hands"}


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


class GestureRecognitionService:
    """
    Owns the frame source, the temporal pipeline state and two subscriber
    registries: raw frame data (for rendering) and temporal gestures (for
    interaction).

    Construct one instance at startup and share it by reference. All frame
    processing happens on the event loop that called start(); callbacks run
    synchronously inside that loop and must not mutate the service.
    """

    def __init__(self, source: FrameSourceProto, cfg: Cfg,
                 clock: Callable[[], float] = _now_ms):
        self.source = source
        self.recognizer_cfg: RecognizerConfig = cfg.recognizer
        self.temporal_cfg: TemporalConfig = cfg.temporal
        self.loop_interval_s = cfg.service.loop_interval_ms / 1000.0
        self.clock = clock

        self.processor = TemporalGestureProcessor(self.temporal_cfg)
        self.state = PipelineState.initial(self.temporal_cfg)

        self._frame_subscribers: List[FrameCallback] = []
        self._gesture_subscribers: List[GestureCallback] = []
        self._current_frame: Optional[GestureFrameData] = None
        self._last_frame_time: Optional[float] = None

        self._initialized = False
        self._processing = False
        self._init_task: Optional[asyncio.Future] = None
        self._loop_task: Optional[asyncio.Future] = None
        self._ready = asyncio.Event()

    # Subscriptions

    def subscribe(self, callback: FrameCallback) -> Unsubscribe:
        """Subscribe to per-frame data. Returns an unsubscribe function."""
        self._frame_subscribers.append(callback)
        self._ensure_started()
        return lambda: self._remove(self._frame_subscribers, callback)

    def subscribe_temporal(self, callback: GestureCallback) -> Unsubscribe:
        """Subscribe to temporal gesture events. Returns an unsubscribe function."""
        self._gesture_subscribers.append(callback)
        self._ensure_started()
        return lambda: self._remove(self._gesture_subscribers, callback)

    @staticmethod
    def _remove(registry: list, callback) -> None:
        if callback in registry:
            registry.remove(callback)

    def get_current_frame_data(self) -> Optional[GestureFrameData]:
        """Latest processed frame, for rendering without a subscription."""
        return self._current_frame

    def is_ready(self) -> bool:
        return self._initialized and self._processing

    async def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Wait for the single readiness notification; False on timeout."""
        try:
            await asyncio.wait_for(self._ready.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    def update_options(self, **options: Any) -> None:
        """
        Update options at runtime.

        Temporal options (buffer_size, ema_alpha, majority_window_size,
        max_gap_size, swipe_min_dx, point_y_offset) apply from the next
        processed frame. model_asset_path and num_hands apply the next time
        the recognizer is initialized.
        """
        recognizer_options = {k: v for k, v in options.items() if k in RECOGNIZER_OPTIONS}
        temporal_options = {k: v for k, v in options.items() if k not in RECOGNIZER_OPTIONS}

        # Validate both before applying either
        temporal_cfg = self.temporal_cfg.updated(**temporal_options)
        recognizer_cfg = replace(self.recognizer_cfg, **recognizer_options)

        self.temporal_cfg = temporal_cfg
        self.recognizer_cfg = recognizer_cfg
        self.processor.configure(temporal_cfg)
        if recognizer_options:
            logger.info(f"Recognizer options {sorted(recognizer_options)} apply on next initialization")

    # Lifecycle

    async def start(self) -> bool:
        """
        Initialize the source and start the frame loop.

        Concurrent callers share one initialization. Returns True once the
        service is ready, False if initialization failed; calling again
        retries.
        """
        if self._initialized:
            self._start_processing()
            return True
        if self._init_task is None or self._init_task.done():
            self._init_task = asyncio.ensure_future(self._initialize())
        return await asyncio.shield(self._init_task)

    def _ensure_started(self) -> None:
        if self._initialized or (self._init_task is not None and not self._init_task.done()):
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; call start() to initialize")
            return
        self._init_task = asyncio.ensure_future(self._initialize())

    async def _initialize(self) -> bool:
        try:
            await self.source.open(self.recognizer_cfg.model_asset_path, self.recognizer_cfg.num_hands)
        except Exception as e:
            logger.error(f"❌ Failed to initialize gesture recognition: {e}")
            return False

        self._initialized = True
        self._start_processing()
        return True

    def _start_processing(self) -> None:
        if self._processing:
            return
        self._processing = True
        self._loop_task = asyncio.ensure_future(self._run())
        self._ready.set()
        logger.info("✅ Gesture recognition ready")

    async def _run(self) -> None:
        while self._processing:
            self.step()
            await asyncio.sleep(self.loop_interval_s)

    def stop(self) -> None:
        """Stop the frame loop. Safe to call repeatedly."""
        if not self._processing:
            return
        self._processing = False
        self._ready.clear()
        if self._loop_task is not None:
            self._loop_task.cancel()
            self._loop_task = None
        logger.info("Gesture recognition stopped")

    def destroy(self) -> None:
        """Stop processing, release the source and drop all subscribers and state."""
        self.stop()
        init_pending = self._init_task is not None and not self._init_task.done()
        if init_pending:
            self._init_task.cancel()
        self._init_task = None

        # An open still running in a worker thread must be released too
        if self._initialized or init_pending:
            try:
                self.source.close()
            except Exception as e:
                logger.error(f"⚠️ Error closing frame source: {e}")

        self._initialized = False
        self._ready.clear()
        self._frame_subscribers.clear()
        self._gesture_subscribers.clear()
        self.state = PipelineState.initial(self.temporal_cfg)
        self._current_frame = None
        self._last_frame_time = None

    # Frame processing

    def step(self) -> Optional[GestureFrameData]:
        """
        Run one loop iteration: process the newest frame if there is one.

        Returns:
            Frame data of the processed frame, None if no new frame or inference failed
        """
        try:
            frame_time = self.source.frame_time()
            if frame_time == self._last_frame_time:
                return None
            self._last_frame_time = frame_time
            result = self.source.recognize(self.clock())
        except Exception:
            logger.exception("Gesture recognition failed for frame")
            return None

        return self.process_result(result)

    def process_result(self, result: RecognitionResult, timestamp: Optional[float] = None) -> GestureFrameData:
        """
        Turn one recognition result into frame data, run temporal detection
        and notify both registries.
        """
        frame = GestureFrameData(
            result=result,
            landmarks=result.landmarks,
            gestures=top_gestures_per_hand(result.gestures),
            top_gesture=select_top_gesture(result.gestures),
            timestamp=self.clock() if timestamp is None else timestamp,
        )
        self._current_frame = frame

        events, self.state = self.processor.process_frame(frame, self.state)
        for event in events:
            self._emit_gesture(event)

        for callback in tuple(self._frame_subscribers):
            try:
                callback(frame)
            except Exception:
                logger.exception("Error in gesture frame callback")

        return frame

    def _emit_gesture(self, event: GestureEvent) -> None:
        for callback in tuple(self._gesture_subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("Error in temporal gesture callback")
