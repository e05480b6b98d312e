"""
PCM WAV helpers built on the standard wave module and numpy.

Samples are handled as signed integers in an (n_frames, channels) array.
8-bit WAV data is unsigned on disk and is re-centred around zero on read
(and shifted back on write), so every width shares one signed scale.

Supported widths: 8, 16, 24 and 32-bit integer PCM.
"""

from __future__ import annotations

import logging
import wave
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

SUPPORTED_SAMPLE_WIDTHS = (1, 2, 3, 4)


@dataclass(frozen=True)
class WavInfo:
    """Format of a PCM WAV stream.

    Attributes:
        sample_rate: Frames per second
        channels: Samples per frame
        sample_width: Bytes per sample
        n_frames: Number of frames in the file
    """

    sample_rate: int
    channels: int
    sample_width: int
    n_frames: int = 0

    @property
    def full_scale(self) -> int:
        """Largest absolute sample value for this width."""
        return full_scale_for(self.sample_width)

    @property
    def duration_seconds(self) -> float:
        return self.n_frames / self.sample_rate


def full_scale_for(sample_width: int) -> int:
    """Largest absolute signed sample value for a sample width in bytes."""
    _check_width(sample_width)
    return 1 << (8 * sample_width - 1)


def _check_width(sample_width: int) -> None:
    if sample_width not in SUPPORTED_SAMPLE_WIDTHS:
        raise ValueError(
            f"Unsupported sample width: {sample_width} bytes "
            f"(expected one of {SUPPORTED_SAMPLE_WIDTHS})"
        )


def pcm_to_array(raw: bytes, sample_width: int, channels: int) -> NDArray[np.int32]:
    """Decode interleaved little-endian PCM into an (n_frames, channels) array."""
    _check_width(sample_width)
    if channels < 1:
        raise ValueError(f"Invalid channel count: {channels}")

    if sample_width == 1:
        samples = np.frombuffer(raw, dtype=np.uint8).astype(np.int32) - 128
    elif sample_width == 2:
        samples = np.frombuffer(raw, dtype="<i2").astype(np.int32)
    elif sample_width == 3:
        triplets = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3)
        padded = np.zeros((len(triplets), 4), dtype=np.uint8)
        padded[:, 1:] = triplets
        # Arithmetic shift sign-extends the top byte
        samples = padded.view("<i4").reshape(-1) >> 8
    else:
        samples = np.frombuffer(raw, dtype="<i4").astype(np.int32)

    usable = len(samples) - len(samples) % channels
    if usable != len(samples):
        logger.warning(f"Dropping {len(samples) - usable} trailing samples of a partial frame")
    return samples[:usable].reshape(-1, channels)


def array_to_pcm(frames: NDArray[np.integer], sample_width: int) -> bytes:
    """Encode an (n_frames, channels) array as interleaved little-endian PCM."""
    _check_width(sample_width)
    samples = np.asarray(frames, dtype=np.int64).reshape(-1)
    limit = full_scale_for(sample_width)
    samples = np.clip(samples, -limit, limit - 1)

    if sample_width == 1:
        return (samples + 128).astype(np.uint8).tobytes()
    if sample_width == 2:
        return samples.astype("<i2").tobytes()
    if sample_width == 3:
        shifted = (samples.astype("<i4") << 8).view(np.uint8).reshape(-1, 4)
        return shifted[:, 1:].tobytes()
    return samples.astype("<i4").tobytes()


def read_wav(path: Path | str) -> tuple[NDArray[np.int32], WavInfo]:
    """Read a whole PCM WAV file into memory.

    Returns:
        (samples as an (n_frames, channels) array, stream format)

    Raises:
        wave.Error: If the file is not PCM WAV
        ValueError: If the sample width is unsupported
    """
    with wave.open(str(path), "rb") as wav:
        info = WavInfo(
            sample_rate=wav.getframerate(),
            channels=wav.getnchannels(),
            sample_width=wav.getsampwidth(),
            n_frames=wav.getnframes(),
        )
        raw = wav.readframes(info.n_frames)

    samples = pcm_to_array(raw, info.sample_width, info.channels)
    logger.info(
        f"Read {path}: {info.n_frames} frames, {info.channels} ch, "
        f"{info.sample_width * 8}-bit, {info.sample_rate} Hz "
        f"({info.duration_seconds:.2f}s)"
    )
    return samples, info


def write_wav(path: Path | str, frames: NDArray[np.integer], info: WavInfo) -> None:
    """Write an (n_frames, channels) array as a PCM WAV file."""
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(info.channels)
        wav.setsampwidth(info.sample_width)
        wav.setframerate(info.sample_rate)
        wav.writeframes(array_to_pcm(frames, info.sample_width))
