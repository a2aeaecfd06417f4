"""TimeMachine: query and mutate a state value at any point on a timeline."""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from deltaline.core.config import MachineConfig
from deltaline.core.errors import InvariantViolation, TimeEvicted
from deltaline.core.logs import ForwardLog, ReverseLog
from deltaline.core.stats import MachineStats
from deltaline.core.types import (
    F,
    R,
    T,
    ForwardEntry,
    ReverseEntry,
    TimeMachineState,
)

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=TimeMachineState)


class TimeMachine(Generic[S, F, R, T]):
    """Owns a state value and the history of changes made to it.

    Changes are stored as reversible deltas split across two logs.  The
    :class:`ReverseLog` holds changes already reflected in the current
    state; the :class:`ForwardLog` holds changes still in the future of the
    current position.  Every public call first seeks the position to the
    requested timestamp, crossing only the entries in between, and then
    reads, inserts, or evicts.

    Timestamps are opaque; they only need ``<`` and ``<=``.  Changes
    recorded at the same timestamp are applied in the order they were
    recorded.

    Not thread-safe: :meth:`value_at` reorganizes the logs, so all calls
    need exclusive access.
    """

    def __init__(self, initial: S, config: MachineConfig | None = None) -> None:
        self._current = initial
        self._forward: ForwardLog[T, F] = ForwardLog()
        self._reverse: ReverseLog[T, F, R] = ReverseLog()
        self._oldest: T | None = None
        self._position: T | None = None
        self._config = config if config is not None else MachineConfig()
        self._stats = MachineStats()

    @classmethod
    def from_config(cls, initial: S, cfg: Any = None) -> TimeMachine[S, F, R, T]:
        """Build a machine from an OmegaConf node, a plain dict, or *None*."""
        return cls(initial, MachineConfig.from_omegaconf(cfg))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> MachineConfig:
        return self._config

    @property
    def stats(self) -> MachineStats:
        return self._stats

    @property
    def oldest(self) -> T | None:
        """The retention boundary, or *None* if nothing was ever forgotten."""
        return self._oldest

    @property
    def position(self) -> T | None:
        """Timestamp of the last seek, or *None* before the first one."""
        return self._position

    @property
    def current(self) -> S:
        """State at the current position.  Does not seek."""
        return self._current

    @property
    def pending_count(self) -> int:
        return len(self._forward)

    @property
    def applied_count(self) -> int:
        return len(self._reverse)

    def __len__(self) -> int:
        return len(self._forward) + len(self._reverse)

    def timestamps(self) -> list[T]:
        """All retained change timestamps in ascending order."""
        return self._reverse.timestamps() + self._forward.timestamps()

    @property
    def time_range(self) -> tuple[T, T] | None:
        """Return ``(earliest, latest)`` retained timestamp or *None* if empty."""
        ts = self.timestamps()
        if not ts:
            return None
        return (ts[0], ts[-1])

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def change(self, delta: F, at: T) -> None:
        """Record *delta* as happening at *at*.

        The delta is applied lazily, the next time the machine is seeked to
        a timestamp ``>= at``.  A later change at the same *at* is applied
        after this one.

        Raises:
            TimeEvicted: If *at* precedes the retention boundary.  The
                machine is left untouched.
        """
        self._check_retained(at, "change")
        self._move_to(at)
        self._forward.push(ForwardEntry(at, delta))
        self._stats.changes_recorded += 1
        self._after_call()

    def value_at(self, at: T) -> S:
        """Return the state as of *at*.

        The returned object is the machine's own state; treat it as
        read-only and do not hold on to it across further calls.

        Raises:
            TimeEvicted: If *at* precedes the retention boundary.  The
                machine is left untouched.
        """
        self._check_retained(at, "value_at")
        self._move_to(at)
        self._stats.queries += 1
        self._after_call()
        return self._current

    def forget_ancient_history(self, until: T) -> None:
        """Discard history before *until*.  Irreversible.

        Every pending change at or before *until* is applied first.  Applied
        changes strictly before *until* are then dropped, and *until* becomes
        the retention boundary; a change exactly at *until* is kept.  The
        boundary never moves backwards: an *until* older than the current
        boundary is treated as the boundary itself.
        """
        if self._oldest is not None and until < self._oldest:
            until = self._oldest

        applied = self._move_forward_to(until)
        if self._position is None or self._position < until:
            self._position = until
        self._stats.seeks += 1
        self._log_seek(until, applied, 0)

        dropped = self._reverse.evict_before(until)
        self._oldest = until
        self._stats.entries_evicted += dropped
        logger.info(
            "Forgot %d change(s) before %r (%d retained)", dropped, until, len(self)
        )
        self._after_call()

    def check_invariants(self) -> None:
        """Verify that state position and both logs agree.

        Raises:
            InvariantViolation: Describing the first inconsistency found.
        """
        pos = self._position
        if pos is None and self._reverse:
            raise InvariantViolation("applied changes exist before any seek")

        previous = None
        for entry in self._reverse:
            if pos is not None and pos < entry.timestamp:
                raise InvariantViolation(
                    f"applied change at {entry.timestamp!r} is after position {pos!r}"
                )
            if previous is not None and entry.timestamp < previous:
                raise InvariantViolation(
                    f"reverse log out of order: {entry.timestamp!r} after {previous!r}"
                )
            if self._oldest is not None and entry.timestamp < self._oldest:
                raise InvariantViolation(
                    f"change at {entry.timestamp!r} precedes boundary {self._oldest!r}"
                )
            previous = entry.timestamp

        previous = None
        for entry in self._forward:
            # Changes recorded exactly at the position stay pending until
            # the next seek.
            if pos is not None and entry.timestamp < pos:
                raise InvariantViolation(
                    f"pending change at {entry.timestamp!r} is before position {pos!r}"
                )
            if previous is not None and entry.timestamp < previous:
                raise InvariantViolation(
                    f"forward log out of order: {entry.timestamp!r} after {previous!r}"
                )
            previous = entry.timestamp

        newest = self._reverse.newest
        nearest = self._forward.peek()
        if newest is not None and nearest is not None:
            if nearest.timestamp < newest.timestamp:
                raise InvariantViolation(
                    f"pending change at {nearest.timestamp!r} precedes applied "
                    f"change at {newest.timestamp!r}"
                )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _check_retained(self, at: T, operation: str) -> None:
        if self._oldest is not None and at < self._oldest:
            self._stats.requests_rejected += 1
            logger.warning(
                "Rejected %s at %r: history starts at %r", operation, at, self._oldest
            )
            raise TimeEvicted(at, self._oldest)

    def _after_call(self) -> None:
        if self._config.validate_invariants:
            self.check_invariants()

    def _move_to(self, at: T) -> None:
        """Seek: apply pending changes up to *at*, then undo applied ones after it."""
        applied = self._move_forward_to(at)
        undone = self._move_backward_to(at)
        self._position = at
        self._stats.seeks += 1
        self._log_seek(at, applied, undone)

    def _log_seek(self, at: T, applied: int, undone: int) -> None:
        if self._config.log_seeks and (applied or undone):
            logger.debug(
                "Seek to %r: applied %d, undid %d (%d pending, %d applied)",
                at,
                applied,
                undone,
                len(self._forward),
                len(self._reverse),
            )

    def _move_forward_to(self, at: T) -> int:
        # Position tracks the newest applied entry.
        crossed = 0
        while self._forward:
            nearest = self._forward.peek()
            if at < nearest.timestamp:
                break
            entry = self._forward.pop()
            try:
                reverse = self._current.apply_forward(entry.forward)
            except Exception:
                self._forward.push(entry)
                raise
            self._reverse.push_newest(
                ReverseEntry(entry.timestamp, entry.forward, reverse)
            )
            self._position = entry.timestamp
            crossed += 1
        self._stats.forward_applied += crossed
        return crossed

    def _move_backward_to(self, at: T) -> int:
        crossed = 0
        while self._reverse:
            newest = self._reverse.newest
            if newest.timestamp <= at:
                break
            entry = self._reverse.pop_newest()
            try:
                self._current.apply_reverse(entry.reverse)
            except Exception:
                self._reverse.push_newest(entry)
                self._position = entry.timestamp
                raise
            self._forward.push(entry.to_forward())
            crossed += 1
        self._stats.reverse_applied += crossed
        return crossed
