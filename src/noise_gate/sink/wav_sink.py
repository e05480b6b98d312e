"""
WAV clip sink.

Writes each clip to its own PCM WAV file.

- File naming: {output_dir}/{prefix}{index}.wav, index starting at 0
- Frames are buffered and flushed in blocks
- abort() removes the partial file of the open clip only
- A clip that fails while closing is aborted, so no truncated file remains
"""

from __future__ import annotations

import logging
import wave
from pathlib import Path
from typing import Any

import numpy as np

from noise_gate.audio.wav_io import WavInfo, array_to_pcm
from noise_gate.errors import SinkStateError
from noise_gate.models.clips import Clip

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_FRAMES = 4096


class WavClipSink:
    """Writes clips as PCM WAV files.

    Attributes:
        output_dir: Directory for clip files
        prefix: File name prefix
        info: Format of the written files
        clips: Completed clips, with file_path set
    """

    def __init__(
        self,
        output_dir: Path | str,
        info: WavInfo,
        prefix: str = "clip_",
        flush_frames: int = DEFAULT_FLUSH_FRAMES,
    ) -> None:
        """Initialize WAV clip sink.

        Args:
            output_dir: Directory for clip files (created on first clip)
            info: Sample rate, channel count and sample width of the stream
            prefix: Text inserted before each clip number
            flush_frames: Frames buffered before writing to the file
        """
        self.output_dir = Path(output_dir)
        self.info = info
        self.prefix = prefix
        self.flush_frames = max(1, flush_frames)
        self.clips: list[Clip] = []

        self._writer: wave.Wave_write | None = None
        self._current: Clip | None = None
        self._pending: list[Any] = []
        self._next_index = 0

    def clip_path(self, index: int) -> Path:
        return self.output_dir / f"{self.prefix}{index}.wav"

    def open_clip(self, start_frame: int) -> None:
        if self._current is not None:
            raise SinkStateError(
                f"open_clip() while {self._current.file_path} is still open"
            )

        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.clip_path(self._next_index)

        writer = wave.open(str(path), "wb")
        writer.setnchannels(self.info.channels)
        writer.setsampwidth(self.info.sample_width)
        writer.setframerate(self.info.sample_rate)

        self._writer = writer
        self._current = Clip(index=self._next_index, start_frame=start_frame, file_path=path)
        self._next_index += 1
        logger.debug(f"Opened clip file: {path}")

    def write_frame(self, frame: Any) -> None:
        if self._current is None:
            raise SinkStateError("write_frame() with no open clip")

        self._pending.append(frame)
        self._current.frame_count += 1
        if len(self._pending) >= self.flush_frames:
            self._flush()

    def _flush(self) -> None:
        if not self._pending or self._writer is None:
            return
        block = np.asarray(self._pending).reshape(len(self._pending), -1)
        self._writer.writeframesraw(array_to_pcm(block, self.info.sample_width))
        self._pending = []

    def close_clip(self) -> None:
        if self._current is None or self._writer is None:
            raise SinkStateError("close_clip() with no open clip")

        clip = self._current
        try:
            self._flush()
            # wave patches the header sizes on close
            self._writer.close()
        except Exception:
            self.abort()
            raise

        self._writer = None
        self._current = None
        self._pending = []

        clip.closed = True
        self.clips.append(clip)
        logger.info(
            f"Clip written: {clip.file_path}, frames={clip.frame_count}, "
            f"duration={clip.duration_seconds(self.info.sample_rate):.2f}s"
        )

    def abort(self) -> None:
        clip, writer = self._current, self._writer
        self._current = None
        self._writer = None
        self._pending = []

        if writer is not None:
            try:
                writer.close()
            except (OSError, wave.Error) as e:
                logger.warning(f"Failed to close aborted clip file: {e}")

        if clip is not None and clip.file_path is not None:
            clip.file_path.unlink(missing_ok=True)
            logger.info(f"Aborted clip removed: {clip.file_path}")
