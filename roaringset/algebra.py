"""Set algebra over key-sorted sequences of containers."""

from __future__ import annotations

from collections.abc import Iterable

from .container import Container, pairs


def union(left: Iterable[Container], right: Iterable[Container]) -> list[Container]:
    """Containers holding every value found on either side."""
    result: list[Container] = []
    for lhs, rhs in pairs(left, right):
        if lhs is not None and rhs is not None:
            result.append(lhs | rhs)
        elif lhs is not None:
            result.append(lhs.copy())
        elif rhs is not None:
            result.append(rhs.copy())
    return result


def intersection(
    left: Iterable[Container], right: Iterable[Container]
) -> list[Container]:
    """Containers holding the values found on both sides."""
    result: list[Container] = []
    for lhs, rhs in pairs(left, right):
        if lhs is not None and rhs is not None:
            combined = lhs & rhs
            if len(combined):
                result.append(combined)
    return result


def difference(
    left: Iterable[Container], right: Iterable[Container]
) -> list[Container]:
    """Containers holding the values of the left side absent from the right."""
    result: list[Container] = []
    for lhs, rhs in pairs(left, right):
        if lhs is None:
            continue
        if rhs is None:
            result.append(lhs.copy())
        else:
            combined = lhs - rhs
            if len(combined):
                result.append(combined)
    return result


def symmetric_difference(
    left: Iterable[Container], right: Iterable[Container]
) -> list[Container]:
    """Containers holding the values found on exactly one side."""
    result: list[Container] = []
    for lhs, rhs in pairs(left, right):
        if lhs is not None and rhs is not None:
            combined = lhs ^ rhs
            if len(combined):
                result.append(combined)
        elif lhs is not None:
            result.append(lhs.copy())
        elif rhs is not None:
            result.append(rhs.copy())
    return result


def intersection_len(left: Iterable[Container], right: Iterable[Container]) -> int:
    """Number of values common to both sides, without building them."""
    return sum(
        lhs.intersection_len(rhs)
        for lhs, rhs in pairs(left, right)
        if lhs is not None and rhs is not None
    )


def is_disjoint(left: Iterable[Container], right: Iterable[Container]) -> bool:
    """Whether the two sides share no value."""
    return all(
        lhs.is_disjoint(rhs)
        for lhs, rhs in pairs(left, right)
        if lhs is not None and rhs is not None
    )


def is_subset(left: Iterable[Container], right: Iterable[Container]) -> bool:
    """Whether every value of the left side is also on the right side."""
    for lhs, rhs in pairs(left, right):
        if lhs is None:
            continue
        if rhs is None or not lhs.is_subset(rhs):
            return False
    return True