"""
Clip sink protocol.

A sink receives, in stream order:
- open_clip(start_frame) when a clip begins
- write_frame(frame) once per forwarded frame
- close_clip() when the clip is complete
- abort() if processing stops because a sink call failed
"""

from __future__ import annotations

from typing import Any, Protocol


class ClipSink(Protocol):
    """Consumer of gated frames."""

    def open_clip(self, start_frame: int) -> None:
        """Allocate a fresh destination for a new clip."""
        ...

    def write_frame(self, frame: Any) -> None:
        """Append one frame to the open clip."""
        ...

    def close_clip(self) -> None:
        """Complete the open clip (e.g. flush to disk)."""
        ...

    def abort(self) -> None:
        """Discard the open clip, leaving completed clips untouched."""
        ...
