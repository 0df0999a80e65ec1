"""
Segmentation of smoothed labels into gesture blocks.
"""
from dataclasses import replace
from typing import List, Optional, Sequence

from .types import Block, SmoothedLabel, normalize_label


def compress(labels: Sequence[SmoothedLabel]) -> List[Block]:
    """Collapse the label sequence into maximal runs of equal labels."""
    blocks: List[Block] = []
    if not labels:
        return blocks

    current = normalize_label(labels[0].label)
    start = 0
    for i in range(1, len(labels)):
        label = normalize_label(labels[i].label)
        if label != current:
            blocks.append(Block(current, start, i - 1))
            current, start = label, i

    blocks.append(Block(current, start, len(labels) - 1))
    return blocks


def merge_tiny_gaps(blocks: Sequence[Block], max_gap_size: int) -> List[Block]:
    """
    Remove short absent-label blocks.

    A gap of at most max_gap_size frames is absorbed by the previous kept
    block when that one has a label, otherwise by the following block when
    that one has a label; a gap with neither is dropped.
    """
    merged: List[Block] = []
    i = 0
    while i < len(blocks):
        block = blocks[i]
        if normalize_label(block.label) is None and len(block) <= max_gap_size:
            if merged and _has_label(merged[-1]):
                merged[-1] = replace(merged[-1], end=block.end)
            elif i + 1 < len(blocks) and _has_label(blocks[i + 1]):
                merged.append(replace(blocks[i + 1], start=block.start))
                i += 1
            i += 1
            continue

        merged.append(block)
        i += 1

    return merged


def merge_consecutive_same(blocks: Sequence[Block]) -> List[Block]:
    """Coalesce neighbouring blocks that ended up with the same label."""
    merged: List[Block] = []
    for block in blocks:
        if merged and normalize_label(merged[-1].label) == normalize_label(block.label):
            merged[-1] = replace(merged[-1], end=block.end)
        else:
            merged.append(block)
    return merged


def segment(labels: Sequence[SmoothedLabel], max_gap_size: int) -> List[Block]:
    """Run compress, gap removal and same-label merging, in that order."""
    blocks = compress(labels)
    blocks = merge_tiny_gaps(blocks, max_gap_size)
    return merge_consecutive_same(blocks)


def _has_label(block: Optional[Block]) -> bool:
    return block is not None and normalize_label(block.label) is not None
