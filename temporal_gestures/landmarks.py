"""
Hand landmark helpers: reference points, top gesture selection and result conversion.
"""
from typing import Optional, List, Sequence, Tuple

from .types import Landmark, RecognitionResult, RecognizedGesture, ReferencePoints


WRIST = 0
THUMB_TIP = 4
INDEX_FINGER_TIP = 8

# Wrist plus the base (MCP) of each finger
PALM_INDICES = [0, 5, 9, 13, 17]

# Hand skeleton as pairs of landmark indices
HAND_CONNECTIONS: List[Tuple[int, int]] = [
    (0, 1), (1, 2), (2, 3), (3, 4),        # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),        # Index finger
    (0, 9), (9, 10), (10, 11), (11, 12),   # Middle finger
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring finger
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),             # Palm
]


def _point(landmarks: Sequence[Landmark], index: int) -> Optional[Landmark]:
    if index < len(landmarks):
        return landmarks[index]
    return None


def palm_center(landmarks: Sequence[Landmark]) -> Optional[Landmark]:
    """
    Calculate the center of the palm.

    Args:
        landmarks: Hand landmarks (normally 21)

    Returns:
        Average of the wrist and the four finger bases that are present,
        or None when the wrist itself is missing
    """
    if _point(landmarks, WRIST) is None:
        return None

    bases = [p for p in (_point(landmarks, i) for i in PALM_INDICES) if p is not None]

    x = sum(p.x for p in bases) / len(bases)
    y = sum(p.y for p in bases) / len(bases)
    z = None
    if any(p.z is not None for p in bases):
        z = sum(p.z or 0.0 for p in bases) / len(bases)

    return Landmark(x=x, y=y, z=z)


def compute_reference_points(landmarks: Optional[Sequence[Landmark]]) -> ReferencePoints:
    """
    Derive wrist, palm center, thumb tip and index tip from one hand.

    Missing or truncated landmark lists give None for the affected points.
    """
    if not landmarks:
        return ReferencePoints()

    return ReferencePoints(
        wrist=_point(landmarks, WRIST),
        palm_center=palm_center(landmarks),
        thumb_tip=_point(landmarks, THUMB_TIP),
        index_tip=_point(landmarks, INDEX_FINGER_TIP),
    )


def top_gestures_per_hand(gestures: Sequence[Sequence[RecognizedGesture]]) -> List[RecognizedGesture]:
    """First (best) category of every hand that has one."""
    return [hand[0] for hand in gestures if hand]


def select_top_gesture(gestures: Sequence[Sequence[RecognizedGesture]]) -> Optional[RecognizedGesture]:
    """Most confident top gesture across all hands; the earlier hand wins ties."""
    top: Optional[RecognizedGesture] = None
    for candidate in top_gestures_per_hand(gestures):
        if top is None or candidate.score > top.score:
            top = candidate
    return top


def to_recognition_result(result) -> RecognitionResult:
    """
    Convert a MediaPipe GestureRecognizerResult into plain dataclasses.

    Args:
        result: Object with hand_landmarks (per hand, objects with x/y/z) and
            gestures (per hand, categories with category_name/score)

    Returns:
        RecognitionResult with copied values; None fields become empty lists
    """
    landmarks = [
        [Landmark(x=lm.x, y=lm.y, z=getattr(lm, "z", None)) for lm in hand]
        for hand in (getattr(result, "hand_landmarks", None) or [])
    ]
    gestures = [
        [RecognizedGesture(category_name=c.category_name, score=c.score) for c in hand]
        for hand in (getattr(result, "gestures", None) or [])
    ]
    return RecognitionResult(landmarks=landmarks, gestures=gestures)
