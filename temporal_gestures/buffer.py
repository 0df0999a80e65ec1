"""
Fixed-capacity sliding buffer of processed frames.
"""
from dataclasses import dataclass
from typing import Iterator, Tuple

from .types import BufferEntry


@dataclass(frozen=True)
class SlidingBuffer:
    """
    FIFO of buffer entries, oldest first.

    The buffer is immutable: append/clear/resize return a new buffer, so a
    snapshot handed to the segmenter never changes underneath it.
    """
    capacity: int
    entries: Tuple[BufferEntry, ...] = ()

    def __post_init__(self):
        if self.capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {self.capacity}")
        if len(self.entries) > self.capacity:
            object.__setattr__(self, "entries", self.entries[-self.capacity:])

    def append(self, entry: BufferEntry) -> "SlidingBuffer":
        """Insert at the tail, evicting the oldest entries beyond capacity."""
        return SlidingBuffer(self.capacity, (self.entries + (entry,))[-self.capacity:])

    def clear(self) -> "SlidingBuffer":
        return SlidingBuffer(self.capacity)

    def resize(self, capacity: int) -> "SlidingBuffer":
        """Change capacity, keeping the newest entries."""
        if capacity == self.capacity:
            return self
        return SlidingBuffer(capacity, self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> BufferEntry:
        return self.entries[index]

    def __iter__(self) -> Iterator[BufferEntry]:
        return iter(self.entries)
