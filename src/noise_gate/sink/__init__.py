"""
Clip sinks.

Components:
- ClipSink: Protocol every sink implements
- ClipCollector: Keeps clips and their frames in memory
- WavClipSink: Writes one PCM WAV file per clip
"""

from __future__ import annotations

from noise_gate.sink.base import ClipSink
from noise_gate.sink.collector import ClipCollector
from noise_gate.sink.wav_sink import WavClipSink

__all__ = [
    "ClipSink",
    "ClipCollector",
    "WavClipSink",
]
