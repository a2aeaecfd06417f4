"""Tests for deltaline.core.stats: MachineStats counters."""

from __future__ import annotations

from deltaline.core.stats import MachineStats


class TestMachineStats:
    def test_defaults_zero(self):
        s = MachineStats()
        assert all(v == 0 for v in s.to_dict().values())

    def test_entries_crossed(self):
        s = MachineStats(forward_applied=3, reverse_applied=2)
        assert s.entries_crossed == 5

    def test_to_dict_keys(self):
        assert set(MachineStats().to_dict()) == {
            "changes_recorded",
            "queries",
            "seeks",
            "forward_applied",
            "reverse_applied",
            "entries_evicted",
            "requests_rejected",
        }

    def test_reset(self):
        s = MachineStats(changes_recorded=4, seeks=9, entries_evicted=1)
        s.reset()
        assert s == MachineStats()
