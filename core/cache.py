"""Per-session memoization of derived aggregation results."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Sequence, TypeVar

__all__ = ["ResultCache"]

T = TypeVar("T")

_SCALARS = (str, int, float, bool, type(None), date, datetime)


def _same_input(left: Any, right: Any) -> bool:
    if left is right:
        return True
    if isinstance(left, _SCALARS) and type(left) is type(right):
        return left == right
    return False


class ResultCache:
    """Single-slot cache per stage, keyed on the identity of its inputs.

    Objects such as raw transaction lists or frames hit only when the very
    same object is passed again; scalars compare by value. Callers must not
    mutate inputs in place and expect a recomputation.
    """

    def __init__(self) -> None:
        self._slots: dict[str, tuple[tuple[Any, ...], Any]] = {}
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, stage: str, inputs: Sequence[Any], compute: Callable[[], T]) -> T:
        key = tuple(inputs)
        slot = self._slots.get(stage)
        if slot is not None:
            cached_inputs, cached_value = slot
            if len(cached_inputs) == len(key) and all(map(_same_input, cached_inputs, key)):
                self.hits += 1
                return cached_value

        self.misses += 1
        value = compute()
        self._slots[stage] = (key, value)
        return value

    def invalidate(self, stage: str | None = None) -> None:
        if stage is None:
            self._slots.clear()
        else:
            self._slots.pop(stage, None)

    def __contains__(self, stage: str) -> bool:
        return stage in self._slots

    def __len__(self) -> int:
        return len(self._slots)
