"""Core data types for the DELTALINE time machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable


class Comparable(Protocol):
    """Anything usable as a timestamp: only ordering is required."""

    def __lt__(self, other: Any) -> bool: ...

    def __le__(self, other: Any) -> bool: ...


F = TypeVar("F")
R = TypeVar("R")
T = TypeVar("T", bound=Comparable)

F_contra = TypeVar("F_contra", contravariant=True)


@runtime_checkable
class TimeMachineState(Protocol[F_contra, R]):
    """Protocol for state values owned by a :class:`TimeMachine`.

    Any object with these two methods can be driven through time; there is
    no base class to inherit from.  ``apply_forward`` may be called many
    times for the same delta as the machine seeks back and forth, so it must
    be deterministic.
    """

    def apply_forward(self, delta: F_contra) -> R:
        """Mutate in place and return the delta that exactly undoes it."""
        ...

    def apply_reverse(self, delta: R) -> None:
        """Mutate in place to undo the forward delta that produced *delta*."""
        ...


@dataclass(frozen=True)
class ForwardEntry(Generic[T, F]):
    """A change not yet materialized into the current state."""

    timestamp: T
    forward: F


@dataclass(frozen=True)
class ReverseEntry(Generic[T, F, R]):
    """A change already applied to the current state.

    Keeps the original forward delta for redo alongside the reverse delta
    produced when it was applied.
    """

    timestamp: T
    forward: F
    reverse: R

    def to_forward(self) -> ForwardEntry[T, F]:
        return ForwardEntry(self.timestamp, self.forward)
