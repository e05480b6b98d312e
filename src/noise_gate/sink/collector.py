"""
In-memory clip sink.
"""

from __future__ import annotations

import logging
from typing import Any

from noise_gate.errors import SinkStateError
from noise_gate.models.clips import CollectedClip

logger = logging.getLogger(__name__)


class ClipCollector:
    """Sink that keeps every clip and its frames in memory.

    Useful for tests, analysis and short streams. Enforces the sink call
    order strictly.

    Attributes:
        clips: Completed clips in stream order
    """

    def __init__(self) -> None:
        self.clips: list[CollectedClip] = []
        self._current: CollectedClip | None = None
        self._next_index = 0

    def open_clip(self, start_frame: int) -> None:
        if self._current is not None:
            raise SinkStateError(
                f"open_clip() while clip {self._current.index} is still open"
            )
        self._current = CollectedClip(index=self._next_index, start_frame=start_frame)
        self._next_index += 1

    def write_frame(self, frame: Any) -> None:
        if self._current is None:
            raise SinkStateError("write_frame() with no open clip")
        self._current.frames.append(frame)
        self._current.frame_count += 1

    def close_clip(self) -> None:
        if self._current is None:
            raise SinkStateError("close_clip() with no open clip")
        self._current.closed = True
        self.clips.append(self._current)
        logger.debug(
            f"Collected clip {self._current.index}: frames "
            f"{self._current.start_frame}..{self._current.end_frame}"
        )
        self._current = None

    def abort(self) -> None:
        if self._current is not None:
            logger.debug(f"Discarding clip {self._current.index}")
        self._current = None

    @property
    def current(self) -> CollectedClip | None:
        """Clip in progress, if any."""
        return self._current

    @property
    def clip_lengths(self) -> list[int]:
        """Frame counts of completed clips."""
        return [clip.frame_count for clip in self.clips]
