"""Set operations folded over many bitmaps at once."""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable, Iterator, Sized
from itertools import chain, islice

from .bitmap import RoaringBitmap
from .container import Container

# Without a known length, this many bitmaps are gathered up front.
BASE_COLLECT = 10
# Inputs of known length up to this size are gathered whole.
MAX_COLLECT = 50


def _check(bitmap: object) -> RoaringBitmap:
    if not isinstance(bitmap, RoaringBitmap):
        raise TypeError(f"expected a RoaringBitmap, got {type(bitmap).__name__}")
    return bitmap


def _collect_start(
    bitmaps: Iterable[RoaringBitmap],
) -> tuple[list[RoaringBitmap], Iterator[RoaringBitmap]]:
    """Take the first bitmaps off the input; return them and the rest."""
    to_collect = BASE_COLLECT
    if isinstance(bitmaps, Sized) and len(bitmaps) <= MAX_COLLECT:
        to_collect = len(bitmaps)
    iterator = iter(bitmaps)
    start = [_check(bitmap) for bitmap in islice(iterator, to_collect)]
    return start, iterator


def _merge(
    bitmaps: Iterable[RoaringBitmap],
    op: Callable[[Container, Container], Container],
) -> RoaringBitmap:
    """Fold containers key by key, copying an input container only once it changes."""
    merged: dict[int, Container] = {}
    owned: set[int] = set()
    for bitmap in bitmaps:
        for container in _check(bitmap)._containers:
            key = container.key
            existing = merged.get(key)
            if existing is None:
                merged[key] = container
                continue
            if key not in owned:
                existing = existing.copy()
                owned.add(key)
            merged[key] = op(existing, container)
    containers = [
        merged[key] if key in owned else merged[key].copy()
        for key in sorted(merged)
        if len(merged[key])
    ]
    for container in containers:
        container.ensure_correct_store()
    return RoaringBitmap._from_containers(containers)


def union(bitmaps: Iterable[RoaringBitmap]) -> RoaringBitmap:
    """Every value found in any of the bitmaps."""
    start, rest = _collect_start(bitmaps)
    if not start:
        return RoaringBitmap()
    start.sort(key=lambda bitmap: len(bitmap._containers), reverse=True)
    if start[0].is_empty():
        # The largest of them is empty, so all the gathered ones are.
        start = start[:1]
    return _merge(chain(start, rest), operator.ior)


def intersection(bitmaps: Iterable[RoaringBitmap]) -> RoaringBitmap:
    """The values found in all of the bitmaps; empty when there are none."""
    start, rest = _collect_start(bitmaps)
    if not start:
        return RoaringBitmap()
    start.sort(key=lambda bitmap: len(bitmap._containers))
    result = start[0].copy()
    for other in chain(start[1:], rest):
        if result.is_empty():
            return result
        result &= _check(other)
    return result


def difference(bitmaps: Iterable[RoaringBitmap]) -> RoaringBitmap:
    """The values of the first bitmap found in none of the others."""
    iterator = iter(bitmaps)
    first = next(iterator, None)
    if first is None:
        return RoaringBitmap()
    result = _check(first).copy()
    for other in iterator:
        if result.is_empty():
            return result
        result -= _check(other)
    return result


def symmetric_difference(bitmaps: Iterable[RoaringBitmap]) -> RoaringBitmap:
    """The values found in an odd number of the bitmaps."""
    return _merge(bitmaps, operator.ixor)