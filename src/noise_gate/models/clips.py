"""
Clip data models.

Clips are numbered by the sink in the order they open, starting at 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class Clip:
    """Metadata for one clip produced by a sink.

    Attributes:
        index: Sequential clip number within the stream (0-indexed)
        start_frame: Stream index of the clip's first frame
        frame_count: Number of frames written so far
        file_path: Output file, for sinks that write to disk
        closed: Whether the clip has been completed
    """

    index: int
    start_frame: int
    frame_count: int = 0
    file_path: Path | None = None
    closed: bool = False

    @property
    def end_frame(self) -> int:
        """Stream index one past the clip's last frame."""
        return self.start_frame + self.frame_count

    def duration_seconds(self, sample_rate: float) -> float:
        """Clip duration at the given sample rate."""
        return self.frame_count / sample_rate


@dataclass
class CollectedClip(Clip):
    """Clip kept in memory together with its frames."""

    frames: list[Any] = field(default_factory=list)
