"""ForwardLog and ReverseLog: the two halves of a machine's history."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Any, Generic

from deltaline.core.types import F, R, T, ForwardEntry, ReverseEntry


class ForwardLog(Generic[T, F]):
    """LIFO stack of changes that are not yet applied.

    The top of the stack (end of ``_entries``) is always the pending change
    nearest the current position, so timestamps decrease towards the top.
    """

    def __init__(self) -> None:
        self._entries: list[ForwardEntry[T, F]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[ForwardEntry[T, F]]:
        """Iterate nearest-first (top of the stack first)."""
        return reversed(self._entries)

    def push(self, entry: ForwardEntry[T, F]) -> None:
        self._entries.append(entry)

    def pop(self) -> ForwardEntry[T, F]:
        """Remove and return the nearest pending change.

        Raises:
            IndexError: If the log is empty.
        """
        return self._entries.pop()

    def peek(self) -> ForwardEntry[T, F] | None:
        """Return the nearest pending change without removing it."""
        if not self._entries:
            return None
        return self._entries[-1]

    def timestamps(self) -> list[T]:
        """Timestamps in ascending order."""
        return [e.timestamp for e in reversed(self._entries)]


class ReverseLog(Generic[T, F, R]):
    """Double-ended sequence of changes already applied.

    The right end holds the most recently applied entry, the left end the
    oldest retained one.  Timestamps increase left to right.
    """

    def __init__(self) -> None:
        self._entries: deque[ReverseEntry[T, F, R]] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[ReverseEntry[T, F, R]]:
        """Iterate oldest-first."""
        return iter(self._entries)

    @property
    def oldest(self) -> ReverseEntry[T, F, R] | None:
        if not self._entries:
            return None
        return self._entries[0]

    @property
    def newest(self) -> ReverseEntry[T, F, R] | None:
        if not self._entries:
            return None
        return self._entries[-1]

    def push_newest(self, entry: ReverseEntry[T, F, R]) -> None:
        self._entries.append(entry)

    def pop_newest(self) -> ReverseEntry[T, F, R]:
        """Remove and return the most recently applied entry.

        Raises:
            IndexError: If the log is empty.
        """
        return self._entries.pop()

    def evict_before(self, until: Any) -> int:
        """Drop entries with timestamp strictly less than *until*.

        Entries at exactly *until* are kept.  Returns the number dropped.
        """
        dropped = 0
        while self._entries and self._entries[0].timestamp < until:
            self._entries.popleft()
            dropped += 1
        return dropped

    def timestamps(self) -> list[T]:
        """Timestamps in ascending order."""
        return [e.timestamp for e in self._entries]
