"""
Audio I/O module.

This module provides PCM WAV reading and writing for the splitter tool.
The gate itself never touches files.

Components:
- read_wav / write_wav: Whole-file PCM WAV I/O
- pcm_to_array / array_to_pcm: Raw interleaved PCM codecs
- WavInfo: Stream format
"""

from __future__ import annotations

from noise_gate.audio.wav_io import (
    WavInfo,
    array_to_pcm,
    full_scale_for,
    pcm_to_array,
    read_wav,
    write_wav,
)

__all__ = [
    "WavInfo",
    "array_to_pcm",
    "full_scale_for",
    "pcm_to_array",
    "read_wav",
    "write_wav",
]
