"""Two-log time machine core for DELTALINE."""

from deltaline.core.config import DeltalineConfig, MachineConfig, load_config
from deltaline.core.errors import InvariantViolation, TimeEvicted, TimeMachineError
from deltaline.core.logs import ForwardLog, ReverseLog
from deltaline.core.machine import TimeMachine
from deltaline.core.stats import MachineStats
from deltaline.core.types import ForwardEntry, ReverseEntry, TimeMachineState

__all__ = [
    "DeltalineConfig",
    "ForwardEntry",
    "ForwardLog",
    "InvariantViolation",
    "MachineConfig",
    "MachineStats",
    "ReverseEntry",
    "ReverseLog",
    "TimeEvicted",
    "TimeMachine",
    "TimeMachineError",
    "TimeMachineState",
    "load_config",
]
