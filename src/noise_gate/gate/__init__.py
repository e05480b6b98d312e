"""
Noise gate state machine.

Exports:
    NoiseGate: Per-stream gate that classifies frames and places clip boundaries
    GateState: Closed, or Open with a release countdown
    Decision: Per-frame outcome (DROP, FORWARD, OPEN_AND_FORWARD, CLOSE)
    next_state: Pure transition function
"""

from noise_gate.gate.noise_gate import Decision, GateState, NoiseGate, next_state

__all__ = [
    "NoiseGate",
    "GateState",
    "Decision",
    "next_state",
]
