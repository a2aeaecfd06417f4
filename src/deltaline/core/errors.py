"""Exception types raised by DELTALINE."""

from __future__ import annotations

from typing import Any


class TimeMachineError(Exception):
    """Base class for all DELTALINE errors."""


class TimeEvicted(TimeMachineError):
    """The requested timestamp precedes the retention boundary.

    The history needed to answer the request was discarded by
    :meth:`TimeMachine.forget_ancient_history`.
    """

    def __init__(self, requested: Any, boundary: Any) -> None:
        self.requested = requested
        self.boundary = boundary
        super().__init__(
            f"time {requested!r} was evicted (history starts at {boundary!r})"
        )

    def __reduce__(self):
        return (type(self), (self.requested, self.boundary))


class InvariantViolation(TimeMachineError):
    """The forward/reverse logs are inconsistent with each other."""
