"""Range operations over a key-sorted list of containers.

Ranges are half-open, ``start`` included and ``stop`` excluded, over the
32-bit values ``0 .. 2**32``. A range with ``start >= stop`` is empty.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from itertools import islice

from .container import MAX_INDEX, Container

VALUE_LIMIT = 1 << 32


def _key_of(container: Container) -> int:
    return container.key


def _split(value: int) -> tuple[int, int]:
    return value >> 16, value & MAX_INDEX


def _inclusive(start: int, stop: int) -> tuple[int, int] | None:
    """Turn a half-open range into inclusive bounds, or None when it is empty."""
    for bound in (start, stop):
        if not 0 <= bound <= VALUE_LIMIT:
            raise ValueError(f"range bound {bound} is outside 0..{VALUE_LIMIT}")
    if start >= stop:
        return None
    return start, stop - 1


def _position(containers: list[Container], key: int) -> int:
    return bisect_left(containers, key, key=_key_of)


def find_container(containers: list[Container], key: int) -> int:
    """Index of the container with ``key``, creating an empty one when missing."""
    pos = _position(containers, key)
    if pos == len(containers) or containers[pos].key != key:
        containers.insert(pos, Container(key))
    return pos


def insert_range(containers: list[Container], start: int, stop: int) -> int:
    """Add every value of ``start..stop``; return how many were new."""
    bounds = _inclusive(start, stop)
    if bounds is None:
        return 0
    start_key, start_low = _split(bounds[0])
    end_key, end_low = _split(bounds[1])

    if start_key == end_key:
        index = find_container(containers, start_key)
        return containers[index].insert_range(start_low, end_low)

    inserted = 0
    low = start_low
    for key in range(start_key, end_key):
        index = find_container(containers, key)
        inserted += containers[index].insert_range(low, MAX_INDEX)
        low = 0

    index = find_container(containers, end_key)
    inserted += containers[index].insert_range(0, end_low)
    return inserted


def remove_range(containers: list[Container], start: int, stop: int) -> int:
    """Remove every value of ``start..stop``; return how many were present.

    Containers left empty are dropped from the list.
    """
    bounds = _inclusive(start, stop)
    if bounds is None:
        return 0
    start_key, start_low = _split(bounds[0])
    end_key, end_low = _split(bounds[1])

    lo = _position(containers, start_key)
    hi = bisect_right(containers, end_key, key=_key_of)
    affected = containers[lo:hi]

    removed = 0
    for container in affected:
        first = start_low if container.key == start_key else 0
        last = end_low if container.key == end_key else MAX_INDEX
        removed += container.remove_range(first, last)

    containers[lo:hi] = [container for container in affected if len(container)]
    return removed


def contains_range(containers: list[Container], start: int, stop: int) -> bool:
    """Whether every value of ``start..stop`` is present; empty ranges always are."""
    bounds = _inclusive(start, stop)
    if bounds is None:
        return True
    start_key, start_low = _split(bounds[0])
    end_key, end_low = _split(bounds[1])

    pos = _position(containers, start_key)
    if pos == len(containers) or containers[pos].key != start_key:
        return False

    if start_key == end_key:
        return containers[pos].contains_range(start_low, end_low)

    # Every key in the span needs a container, so the one `span` places on
    # must carry the end key.
    span = end_key - start_key
    last_pos = pos + span
    if last_pos >= len(containers) or containers[last_pos].key != end_key:
        return False

    first, *middle, last = containers[pos : last_pos + 1]
    return (
        first.contains_range(start_low, MAX_INDEX)
        and all(container.is_full() for container in middle)
        and last.contains_range(0, end_low)
    )


def range_cardinality(containers: list[Container], start: int, stop: int) -> int:
    """Number of stored values that lie in ``start..stop``."""
    bounds = _inclusive(start, stop)
    if bounds is None:
        return 0
    start_key, start_low = _split(bounds[0])
    end_key, end_low = _split(bounds[1])

    cardinality = 0
    pos = _position(containers, start_key)
    if pos < len(containers) and containers[pos].key == start_key:
        container = containers[pos]
        if start_key == end_key:
            cardinality += container.rank(end_low)
        else:
            cardinality += len(container)
        if start_low:
            cardinality -= container.rank(start_low - 1)
        pos += 1

    for container in islice(containers, pos, None):
        if container.key < end_key:
            cardinality += len(container)
        elif container.key == end_key:
            cardinality += container.rank(end_low)
            break
        else:
            break
    return cardinality