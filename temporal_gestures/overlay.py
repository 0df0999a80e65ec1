"""
OpenCV drawing of hand landmarks and gesture status on preview frames.
"""
import cv2
import numpy as np
from typing import Optional, Sequence

from .landmarks import HAND_CONNECTIONS
from .types import HandLandmarks, Landmark


def _to_px(lm: Landmark, width: int, height: int):
    return int(lm.x * width), int(lm.y * height)


def draw_landmarks(frame: np.ndarray, hands: Sequence[HandLandmarks]) -> np.ndarray:
    """
    Draw the hand skeleton and joints on the frame in place.

    Args:
        frame: BGR frame
        hands: Landmarks per hand in [0..1] range

    Returns:
        The same frame, for chaining
    """
    height, width = frame.shape[:2]

    for hand in hands:
        if not hand:
            continue

        for start, end in HAND_CONNECTIONS:
            if start >= len(hand) or end >= len(hand):
                continue
            cv2.line(frame, _to_px(hand[start], width, height), _to_px(hand[end], width, height),
                     (0, 255, 0), 1, cv2.LINE_AA)

        for lm in hand:
            cv2.circle(frame, _to_px(lm, width, height), 3, (0, 0, 255), -1)

    return frame


def draw_palm_center(frame: np.ndarray, center: Landmark) -> np.ndarray:
    """Draw a larger red dot for the palm center."""
    height, width = frame.shape[:2]
    px, py = _to_px(center, width, height)
    cv2.circle(frame, (px, py), 8, (0, 0, 255), -1)
    cv2.putText(frame, "Palm", (px + 10, py - 10), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 255), 2)
    return frame


def draw_status(frame: np.ndarray, top_label: Optional[str], last_gesture: Optional[str]) -> np.ndarray:
    """Static and temporal gesture status in the top-left corner."""
    cv2.putText(frame, f"Static: {top_label or '-'}", (10, 30),
                cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
    cv2.putText(frame, f"Temporal: {last_gesture or '-'}", (10, 60),
                cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0) if last_gesture else (255, 255, 255), 2)
    cv2.putText(frame, "Press 'q' to quit", (10, frame.shape[0] - 20),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
    return frame
