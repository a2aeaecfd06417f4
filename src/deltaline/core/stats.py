"""Machine statistics and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MachineStats:
    """Track how much work a machine has done."""

    changes_recorded: int = 0
    queries: int = 0
    seeks: int = 0
    forward_applied: int = 0
    reverse_applied: int = 0
    entries_evicted: int = 0
    requests_rejected: int = 0

    @property
    def entries_crossed(self) -> int:
        """Total deltas applied in either direction."""
        return self.forward_applied + self.reverse_applied

    def to_dict(self) -> dict:
        return {
            "changes_recorded": self.changes_recorded,
            "queries": self.queries,
            "seeks": self.seeks,
            "forward_applied": self.forward_applied,
            "reverse_applied": self.reverse_applied,
            "entries_evicted": self.entries_evicted,
            "requests_rejected": self.requests_rejected,
        }

    def reset(self) -> None:
        self.changes_recorded = 0
        self.queries = 0
        self.seeks = 0
        self.forward_applied = 0
        self.reverse_applied = 0
        self.entries_evicted = 0
        self.requests_rejected = 0
