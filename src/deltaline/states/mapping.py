"""MappingState: a dict changed one key at a time."""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class SetKey:
    key: Hashable
    value: Any


@dataclass(frozen=True)
class DeleteKey:
    key: Hashable


@dataclass(frozen=True)
class RestoreKey:
    """Put *key* back the way it was: absent, or holding *value*."""

    key: Hashable
    present: bool
    value: Any = None


MappingDelta = Union[SetKey, DeleteKey]


class MappingState(Mapping):
    """Read-only mapping view over a dict that only deltas may change.

    Deleting a missing key is allowed and is a no-op.
    """

    def __init__(self, data: Mapping | None = None) -> None:
        self._data: dict = dict(data or {})

    def __getitem__(self, key: Hashable) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"MappingState({self._data!r})"

    def to_dict(self) -> dict:
        return dict(self._data)

    def apply_forward(self, delta: MappingDelta) -> RestoreKey:
        key = delta.key
        if key in self._data:
            restore = RestoreKey(key, True, self._data[key])
        else:
            restore = RestoreKey(key, False)

        if isinstance(delta, SetKey):
            self._data[key] = delta.value
        elif isinstance(delta, DeleteKey):
            self._data.pop(key, None)
        else:
            raise TypeError(f"Unsupported mapping delta: {delta!r}")
        return restore

    def apply_reverse(self, delta: RestoreKey) -> None:
        if delta.present:
            self._data[delta.key] = delta.value
        else:
            self._data.pop(delta.key, None)
