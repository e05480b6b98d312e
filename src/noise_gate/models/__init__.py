"""
Data models for the noise gate.

This module provides data models for:
- Clips: Clip, CollectedClip
"""

from __future__ import annotations

from noise_gate.models.clips import Clip, CollectedClip

__all__ = [
    "Clip",
    "CollectedClip",
]
