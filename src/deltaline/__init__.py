"""DELTALINE: state queried and mutated at any point on a timeline."""

from deltaline.core import (
    InvariantViolation,
    MachineConfig,
    TimeEvicted,
    TimeMachine,
    TimeMachineError,
    TimeMachineState,
)

__version__ = "0.1.0"

__all__ = [
    "InvariantViolation",
    "MachineConfig",
    "TimeEvicted",
    "TimeMachine",
    "TimeMachineError",
    "TimeMachineState",
]
