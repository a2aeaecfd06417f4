"""ArrayState: a numpy array changed by indexed assignment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True, eq=False)
class ArrayPatch:
    """Assign *values* at *index* (any basic numpy index: int, slice, tuple).

    Used in both directions: the reverse of a patch is a patch holding the
    values it overwrote.
    """

    index: Any
    values: Any


class ArrayState:
    """Fixed-shape numpy array mutated in place by :class:`ArrayPatch`.

    Shape and dtype never change; values are cast to the array's dtype on
    assignment like any numpy setitem.
    """

    def __init__(self, array: Any) -> None:
        self._array = np.array(array, copy=True)

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the current values."""
        view = self._array.view()
        view.flags.writeable = False
        return view

    @property
    def shape(self) -> tuple[int, ...]:
        return self._array.shape

    @property
    def dtype(self) -> np.dtype:
        return self._array.dtype

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ArrayState):
            other = other._array
        try:
            return bool(np.array_equal(self._array, other))
        except (TypeError, ValueError):
            return NotImplemented

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"ArrayState({self._array!r})"

    def apply_forward(self, delta: ArrayPatch) -> ArrayPatch:
        previous = np.array(self._array[delta.index], copy=True)
        self._array[delta.index] = delta.values
        return ArrayPatch(delta.index, previous)

    def apply_reverse(self, delta: ArrayPatch) -> None:
        self._array[delta.index] = delta.values
