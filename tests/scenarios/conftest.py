"""Scenario helpers: a naive replay model to check machines against."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from deltaline.states.arithmetic import ArithmeticState, Delta, add, div, mul, sub


@dataclass
class ReferenceTimeline:
    """Re-applies every recorded change from scratch for each query.

    Slow but obviously correct: changes are sorted by timestamp, ties kept
    in recording order.
    """

    initial: Any
    changes: list[tuple[Any, int, Any]] = field(default_factory=list)

    def record(self, delta: Any, at: Any) -> None:
        self.changes.append((at, len(self.changes), delta))

    def value_at(self, at: Any) -> Any:
        state = copy.deepcopy(self.initial)
        for ts, _, delta in sorted(self.changes, key=lambda c: (c[0], c[1])):
            if at < ts:
                break
            state.apply_forward(delta)
        return state


def random_delta(rng: np.random.Generator) -> Delta:
    """Random invertible arithmetic step with a small operand."""
    kind = int(rng.integers(0, 4))
    n = int(rng.integers(1, 6))
    return (add, sub, mul, div)[kind](n)


def random_timeline(
    rng: np.random.Generator, n_changes: int, horizon: int
) -> list[tuple[Delta, int]]:
    return [
        (random_delta(rng), int(rng.integers(0, horizon))) for _ in range(n_changes)
    ]


def initial_state() -> ArithmeticState:
    return ArithmeticState(7)
