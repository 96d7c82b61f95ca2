"""A compressed set of 32-bit unsigned integers."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from itertools import chain

from . import algebra, ranges
from .container import MAX_INDEX, Container
from .iteration import BitmapIterator, NonSortedIntegers

MAX_VALUE = (1 << 32) - 1
_KEY_COUNT = MAX_INDEX + 1


def _check_value(value: int) -> None:
    if not isinstance(value, int) or not 0 <= value <= MAX_VALUE:
        raise ValueError(f"value {value!r} is outside 0..{MAX_VALUE}")


def _split(value: int) -> tuple[int, int]:
    return value >> 16, value & MAX_INDEX


def _join(key: int, index: int) -> int:
    return key << 16 | index


def _key_of(container: Container) -> int:
    return container.key


class RoaringBitmap:
    """A set of integers in ``0 .. 2**32`` stored as sorted 16-bit containers."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, iterable: Iterable[int] | None = None) -> None:
        self._containers: list[Container] = []
        if iterable is not None:
            self.extend(iterable)

    @classmethod
    def _from_containers(cls, containers: list[Container]) -> RoaringBitmap:
        bitmap = cls()
        bitmap._containers = containers
        return bitmap

    @classmethod
    def full(cls) -> RoaringBitmap:
        """A bitmap holding every 32-bit value."""
        return cls._from_containers([Container.full(key) for key in range(_KEY_COUNT)])

    @classmethod
    def from_sorted_iter(cls, iterable: Iterable[int]) -> RoaringBitmap:
        """Build a bitmap from strictly increasing values.

        Raises NonSortedIntegers when the values are not strictly increasing.
        """
        bitmap = cls()
        bitmap.append(iterable)
        return bitmap

    def _locate(self, key: int) -> int | None:
        pos = bisect_left(self._containers, key, key=_key_of)
        if pos < len(self._containers) and self._containers[pos].key == key:
            return pos
        return None

    def insert(self, value: int) -> bool:
        """Add a value; return whether it was absent."""
        _check_value(value)
        key, index = _split(value)
        pos = ranges.find_container(self._containers, key)
        return self._containers[pos].insert(index)

    def insert_range(self, start: int, stop: int) -> int:
        """Add every value of ``start..stop``; return how many were new."""
        return ranges.insert_range(self._containers, start, stop)

    def push(self, value: int) -> bool:
        """Add value only if it is greater than the current maximum."""
        _check_value(value)
        key, index = _split(value)
        if self._containers:
            last = self._containers[-1]
            if last.key == key:
                return last.push(index)
            if last.key > key:
                return False
        container = Container(key)
        container.push(index)
        self._containers.append(container)
        return True

    def _push_unchecked(self, value: int) -> None:
        key, index = _split(value)
        if self._containers and self._containers[-1].key == key:
            self._containers[-1].push_unchecked(index)
            return
        container = Container(key)
        container.push_unchecked(index)
        self._containers.append(container)

    def remove(self, value: int) -> bool:
        """Remove a value; return whether it was present."""
        _check_value(value)
        key, index = _split(value)
        pos = self._locate(key)
        if pos is None:
            return False
        container = self._containers[pos]
        if not container.remove(index):
            return False
        if not len(container):
            del self._containers[pos]
        return True

    def remove_range(self, start: int, stop: int) -> int:
        """Remove every value of ``start..stop``; return how many were present."""
        return ranges.remove_range(self._containers, start, stop)

    def contains(self, value: int) -> bool:
        """Whether value is in the set."""
        _check_value(value)
        key, index = _split(value)
        pos = self._locate(key)
        return pos is not None and index in self._containers[pos]

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, int) or not 0 <= value <= MAX_VALUE:
            return False
        return self.contains(value)

    def contains_range(self, start: int, stop: int) -> bool:
        """Whether every value of ``start..stop`` is present; empty ranges always are."""
        return ranges.contains_range(self._containers, start, stop)

    def range_cardinality(self, start: int, stop: int) -> int:
        """Number of stored values in ``start..stop``."""
        return ranges.range_cardinality(self._containers, start, stop)

    def clear(self) -> None:
        self._containers.clear()

    def is_empty(self) -> bool:
        return not self._containers

    def is_full(self) -> bool:
        return len(self._containers) == _KEY_COUNT and all(
            container.is_full() for container in self._containers
        )

    def __len__(self) -> int:
        return sum(len(container) for container in self._containers)

    def __bool__(self) -> bool:
        return not self.is_empty()

    def min(self) -> int | None:
        """The smallest value, or None when empty."""
        if not self._containers:
            return None
        first = self._containers[0]
        low = first.min()
        return None if low is None else _join(first.key, low)

    def max(self) -> int | None:
        """The greatest value, or None when empty."""
        if not self._containers:
            return None
        last = self._containers[-1]
        high = last.max()
        return None if high is None else _join(last.key, high)

    def rank(self, value: int) -> int:
        """Number of stored values that are <= value."""
        _check_value(value)
        key, index = _split(value)
        pos = bisect_left(self._containers, key, key=_key_of)
        below = sum(len(container) for container in self._containers[:pos])
        if pos < len(self._containers) and self._containers[pos].key == key:
            return below + self._containers[pos].rank(index)
        return below

    def select(self, n: int) -> int | None:
        """The n-th smallest value, or None when ``n >= len(self)``."""
        if n < 0:
            raise ValueError(f"position {n} is negative")
        for container in self._containers:
            size = len(container)
            if n < size:
                index = container.select(n)
                return None if index is None else _join(container.key, index)
            n -= size
        return None

    def iter(self) -> BitmapIterator:
        """An ordered, double-ended iterator over the values."""
        return BitmapIterator(self._containers)

    def __iter__(self) -> BitmapIterator:
        return self.iter()

    def __reversed__(self) -> Iterator[int]:
        return chain.from_iterable(
            reversed(container) for container in reversed(self._containers)
        )

    def extend(self, iterable: Iterable[int]) -> None:
        """Insert every value of iterable."""
        for value in iterable:
            self.insert(value)

    def append(self, iterable: Iterable[int]) -> int:
        """Add strictly increasing values greater than the current maximum.

        Returns how many were added. Raises NonSortedIntegers, carrying the
        number added so far, at the first value out of order; the values
        before it stay added.
        """
        iterator = iter(iterable)
        first = next(iterator, None)
        if first is None:
            return 0
        _check_value(first)
        current = self.max()
        if current is not None and first <= current:
            raise NonSortedIntegers(0)
        self._push_unchecked(first)
        previous = first
        count = 1
        for value in iterator:
            _check_value(value)
            if value <= previous:
                raise NonSortedIntegers(count)
            self._push_unchecked(value)
            previous = value
            count += 1
        return count

    def copy(self) -> RoaringBitmap:
        return self._from_containers([container.copy() for container in self._containers])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoaringBitmap):
            return NotImplemented
        return self._containers == other._containers

    def __repr__(self) -> str:
        size = len(self)
        if size < 16:
            return f"RoaringBitmap<{list(self)}>"
        return f"RoaringBitmap<{size} values between {self.min()} and {self.max()}>"

    def __or__(self, other: object) -> RoaringBitmap:
        if not isinstance(other, RoaringBitmap):
            return NotImplemented
        return self._from_containers(algebra.union(self._containers, other._containers))

    def __ior__(self, other: object) -> RoaringBitmap:
        if not isinstance(other, RoaringBitmap):
            return NotImplemented
        self._containers = algebra.union(self._containers, other._containers)
        return self

    def __and__(self, other: object) -> RoaringBitmap:
        if not isinstance(other, RoaringBitmap):
            return NotImplemented
        return self._from_containers(
            algebra.intersection(self._containers, other._containers)
        )

    def __iand__(self, other: object) -> RoaringBitmap:
        if not isinstance(other, RoaringBitmap):
            return NotImplemented
        self._containers = algebra.intersection(self._containers, other._containers)
        return self

    def __sub__(self, other: object) -> RoaringBitmap:
        if not isinstance(other, RoaringBitmap):
            return NotImplemented
        return self._from_containers(
            algebra.difference(self._containers, other._containers)
        )

    def __isub__(self, other: object) -> RoaringBitmap:
        if not isinstance(other, RoaringBitmap):
            return NotImplemented
        self._containers = algebra.difference(self._containers, other._containers)
        return self

    def __xor__(self, other: object) -> RoaringBitmap:
        if not isinstance(other, RoaringBitmap):
            return NotImplemented
        return self._from_containers(
            algebra.symmetric_difference(self._containers, other._containers)
        )

    def __ixor__(self, other: object) -> RoaringBitmap:
        if not isinstance(other, RoaringBitmap):
            return NotImplemented
        self._containers = algebra.symmetric_difference(
            self._containers, other._containers
        )
        return self

    def intersection_len(self, other: RoaringBitmap) -> int:
        """Size of the intersection, without building it."""
        return algebra.intersection_len(self._containers, other._containers)

    def union_len(self, other: RoaringBitmap) -> int:
        """Size of the union, without building it."""
        return len(self) + len(other) - self.intersection_len(other)

    def difference_len(self, other: RoaringBitmap) -> int:
        """Size of the difference, without building it."""
        return len(self) - self.intersection_len(other)

    def symmetric_difference_len(self, other: RoaringBitmap) -> int:
        """Size of the symmetric difference, without building it."""
        return len(self) + len(other) - 2 * self.intersection_len(other)

    def is_disjoint(self, other: RoaringBitmap) -> bool:
        return algebra.is_disjoint(self._containers, other._containers)

    def is_subset(self, other: RoaringBitmap) -> bool:
        return algebra.is_subset(self._containers, other._containers)

    def is_superset(self, other: RoaringBitmap) -> bool:
        return other.is_subset(self)