"""
Sliding majority filter over buffered static gesture labels.
"""
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from .types import BufferEntry, NONE_LABEL, SmoothedLabel


def sliding_majority_filter(entries: Sequence[BufferEntry], window_size: int) -> List[SmoothedLabel]:
    """
    Replace every label by the majority label of the window centred on it.

    The window is clamped at the buffer edges. Ties prefer a present label
    over absence, and among present labels the one with the highest average
    confidence inside the window; equal averages keep the first label seen.

    Args:
        entries: Buffer snapshot, oldest first
        window_size: Window length (3 or 5)

    Returns:
        One SmoothedLabel per entry; confidence is the winning count over the
        number of frames in the (clamped) window
    """
    n = len(entries)
    half = window_size // 2
    smoothed: List[SmoothedLabel] = []

    for i in range(n):
        start = max(0, i - half)
        end = min(n - 1, i + half)

        # dicts keep first-seen order, which decides the remaining ties
        counts: Dict[str, int] = {}
        scores: Dict[str, List[float]] = defaultdict(list)
        for entry in entries[start:end + 1]:
            label = entry.label or NONE_LABEL
            counts[label] = counts.get(label, 0) + 1
            scores[label].append(entry.score)

        max_count = max(counts.values())
        tied = [label for label, count in counts.items() if count == max_count]
        winner = _break_tie(tied, scores)

        smoothed.append(SmoothedLabel(
            label=None if winner == NONE_LABEL else winner,
            confidence=max_count / (end - start + 1),
        ))

    return smoothed


def _break_tie(tied: List[str], scores: Dict[str, List[float]]) -> str:
    present = [label for label in tied if label != NONE_LABEL]
    if not present:
        return tied[0]

    best: Optional[str] = None
    best_avg = -1.0
    for label in present:
        avg = sum(scores[label]) / len(scores[label])
        if avg > best_avg:
            best, best_avg = label, avg
    return best
