"""
Exponential moving average smoothing of hand reference points.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .types import Landmark, ReferencePoints


def apply_ema(current: Optional[Landmark], previous: Optional[Landmark], alpha: float) -> Optional[Landmark]:
    """
    Blend the current landmark with the previous smoothed value.

    Args:
        current: Landmark observed this frame (None if not detected)
        previous: Last smoothed value (None if there is none yet)
        alpha: Weight of the current sample in (0, 1]; lower = more smoothing

    Returns:
        Smoothed landmark, current unchanged when there is no previous value,
        None when current is None
    """
    if current is None:
        return None
    if previous is None:
        return current

    z = current.z
    if current.z is not None and previous.z is not None:
        z = alpha * current.z + (1 - alpha) * previous.z

    return Landmark(
        x=alpha * current.x + (1 - alpha) * previous.x,
        y=alpha * current.y + (1 - alpha) * previous.y,
        z=z,
    )


@dataclass(frozen=True)
class SmoothingState:
    """Last non-null smoothed value of every reference point."""
    wrist: Optional[Landmark] = None
    palm_center: Optional[Landmark] = None
    thumb_tip: Optional[Landmark] = None
    index_tip: Optional[Landmark] = None


def smooth_reference_points(points: ReferencePoints, state: SmoothingState,
                            alpha: float) -> Tuple[ReferencePoints, SmoothingState]:
    """
    Smooth every reference point independently.

    A point missing this frame comes out as None, while the state keeps its
    last estimate so the next detection blends against it.

    Returns:
        (smoothed points for this frame, state for the next frame)
    """
    wrist = apply_ema(points.wrist, state.wrist, alpha)
    palm = apply_ema(points.palm_center, state.palm_center, alpha)
    thumb = apply_ema(points.thumb_tip, state.thumb_tip, alpha)
    index = apply_ema(points.index_tip, state.index_tip, alpha)

    smoothed = ReferencePoints(wrist=wrist, palm_center=palm, thumb_tip=thumb, index_tip=index)
    next_state = SmoothingState(
        wrist=wrist if wrist is not None else state.wrist,
        palm_center=palm if palm is not None else state.palm_center,
        thumb_tip=thumb if thumb is not None else state.thumb_tip,
        index_tip=index if index is not None else state.index_tip,
    )
    return smoothed, next_state
