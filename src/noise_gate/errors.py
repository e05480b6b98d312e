"""
Exception types raised by the noise gate and its sinks.

The gate itself never fails on audio data once configured. Everything here is
either a configuration problem (raised before a stream starts) or a caller
contract violation.
"""

from __future__ import annotations


class NoiseGateError(Exception):
    """Base class for all noise gate errors."""


class ConfigError(NoiseGateError, ValueError):
    """Raised when gate configuration is invalid.

    Always raised before any frame is processed, so no partial output
    exists when it propagates.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)


class FrameShapeError(NoiseGateError, ValueError):
    """Raised when a frame does not have the stream's channel count."""

    def __init__(self, expected: int | None, got: int | tuple[int, ...]) -> None:
        self.expected = expected
        self.got = got
        if expected is None:
            message = f"Malformed frame: shape {got}"
        else:
            message = f"Frame has {got} channels, stream has {expected}"
        super().__init__(message)


class GateFinalizedError(NoiseGateError, RuntimeError):
    """Raised when a frame is pushed into a gate that was already finalized."""


class SinkStateError(NoiseGateError, RuntimeError):
    """Raised when a clip sink receives calls out of protocol order."""
