"""Iteration over the values of a sequence of containers."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from .container import Container


class NonSortedIntegers(ValueError):
    """Raised when values handed in as sorted are not strictly increasing."""

    def __init__(self, valid_until: int) -> None:
        super().__init__(f"integers are ordered up to the {valid_until}th element")
        self.valid_until = valid_until


class BitmapIterator:
    """Ordered, double-ended iterator over all values of some containers."""

    def __init__(self, containers: Iterable[Container]) -> None:
        self._outer: deque[Container] = deque(containers)
        self._front: deque[int] = deque()
        self._back: deque[int] = deque()
        self._remaining = sum(len(container) for container in self._outer)

    def __iter__(self) -> BitmapIterator:
        return self

    def _consumed(self) -> None:
        self._remaining = max(0, self._remaining - 1)

    def __next__(self) -> int:
        while not self._front and self._outer:
            self._front = deque(self._outer.popleft())
        if self._front:
            value = self._front.popleft()
        elif self._back:
            value = self._back.popleft()
        else:
            raise StopIteration
        self._consumed()
        return value

    def next_back(self) -> int | None:
        """Take the greatest remaining value, or None when exhausted."""
        while not self._back and self._outer:
            self._back = deque(self._outer.pop())
        if self._back:
            value = self._back.pop()
        elif self._front:
            value = self._front.pop()
        else:
            return None
        self._consumed()
        return value

    def size_hint(self) -> tuple[int, int]:
        """Lower and upper bound on the values left, which are equal."""
        return self._remaining, self._remaining

    def __len__(self) -> int:
        return self._remaining

    def __length_hint__(self) -> int:
        return self._remaining