"""
Metrics module for the noise gate.

Exports:
    GateMetrics: Prometheus metrics for gated streams
"""

from noise_gate.metrics.prometheus import GateMetrics

__all__ = ["GateMetrics"]
