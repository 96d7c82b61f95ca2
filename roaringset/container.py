"""Sixteen-bit containers, the chunks a roaring bitmap is made of."""

from __future__ import annotations

import enum
import operator
from bisect import bisect_left, bisect_right
from collections.abc import Callable, Iterable, Iterator

ARRAY_LIMIT = 4096
MAX_INDEX = 0xFFFF
BITMAP_BITS = MAX_INDEX + 1
_BITMAP_BYTES = BITMAP_BITS // 8
_FULL_BITS = (1 << BITMAP_BITS) - 1
_WORD_BITS = 64
_WORD_MASK = (1 << _WORD_BITS) - 1


class StoreKind(enum.Enum):
    """How a container holds its values."""

    ARRAY = "array"
    BITMAP = "bitmap"


_SET_OPS: dict[str, Callable[[set[int], set[int]], set[int]]] = {
    "or": operator.or_,
    "and": operator.and_,
    "sub": operator.sub,
    "xor": operator.xor,
}

_BIT_OPS: dict[str, Callable[[int, int], int]] = {
    "or": operator.or_,
    "and": operator.and_,
    "sub": lambda a, b: a & ~b,
    "xor": operator.xor,
}


def _check_index(index: int) -> None:
    if not 0 <= index <= MAX_INDEX:
        raise ValueError(f"index {index} is outside 0..{MAX_INDEX}")


def _range_mask(start: int, end: int) -> int:
    return ((1 << (end - start + 1)) - 1) << start


def _array_to_bits(values: Iterable[int]) -> int:
    buffer = bytearray(_BITMAP_BYTES)
    for value in values:
        buffer[value >> 3] |= 1 << (value & 7)
    return int.from_bytes(buffer, "little")


def _bits_to_array(bits: int) -> list[int]:
    values: list[int] = []
    for byte_index, byte in enumerate(bits.to_bytes(_BITMAP_BYTES, "little")):
        if byte:
            base = byte_index << 3
            values.extend(base + bit for bit in range(8) if byte >> bit & 1)
    return values


class Container:
    """The set of low 16-bit halves sharing one high 16-bit key."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, key: int) -> None:
        _check_index(key)
        self.key = key
        self._kind = StoreKind.ARRAY
        self._array: list[int] = []
        self._bits = 0
        self._count = 0

    @classmethod
    def full(cls, key: int) -> Container:
        """A container holding every index."""
        container = cls(key)
        container._set_bits(_FULL_BITS, BITMAP_BITS)
        return container

    @property
    def kind(self) -> StoreKind:
        return self._kind

    def _set_bits(self, bits: int, count: int | None = None) -> None:
        self._kind = StoreKind.BITMAP
        self._array = []
        self._bits = bits
        self._count = bits.bit_count() if count is None else count

    def _set_array(self, values: list[int]) -> None:
        self._kind = StoreKind.ARRAY
        self._array = values
        self._bits = 0
        self._count = 0

    def _as_bits(self) -> int:
        if self._kind is StoreKind.ARRAY:
            return _array_to_bits(self._array)
        return self._bits

    def _as_array(self) -> list[int]:
        if self._kind is StoreKind.ARRAY:
            return self._array
        return _bits_to_array(self._bits)

    def __len__(self) -> int:
        if self._kind is StoreKind.ARRAY:
            return len(self._array)
        return self._count

    def insert(self, index: int) -> bool:
        """Add an index; return whether it was absent."""
        _check_index(index)
        if self._kind is StoreKind.ARRAY:
            pos = bisect_left(self._array, index)
            if pos < len(self._array) and self._array[pos] == index:
                return False
            self._array.insert(pos, index)
        else:
            bit = 1 << index
            if self._bits & bit:
                return False
            self._bits |= bit
            self._count += 1
        self.ensure_correct_store()
        return True

    def insert_range(self, start: int, end: int) -> int:
        """Add every index in start..=end; return how many were new."""
        _check_index(start)
        _check_index(end)
        if start > end:
            return 0
        width = end - start + 1
        if width > ARRAY_LIMIT and self._kind is StoreKind.ARRAY:
            self._set_bits(_array_to_bits(self._array), len(self._array))
        if self._kind is StoreKind.ARRAY:
            lo = bisect_left(self._array, start)
            hi = bisect_right(self._array, end)
            inserted = width - (hi - lo)
            self._array[lo:hi] = range(start, end + 1)
        else:
            mask = _range_mask(start, end)
            inserted = (mask & ~self._bits).bit_count()
            self._bits |= mask
            self._count += inserted
        self.ensure_correct_store()
        return inserted

    def push(self, index: int) -> bool:
        """Append index only if it is greater than the current maximum."""
        _check_index(index)
        current = self.max()
        if current is not None and index <= current:
            return False
        self.push_unchecked(index)
        return True

    def push_unchecked(self, index: int) -> None:
        """Append index; the caller guarantees it exceeds the maximum."""
        if self._kind is StoreKind.ARRAY:
            self._array.append(index)
        else:
            self._bits |= 1 << index
            self._count += 1
        self.ensure_correct_store()

    def remove(self, index: int) -> bool:
        """Remove an index; return whether it was present."""
        _check_index(index)
        if self._kind is StoreKind.ARRAY:
            pos = bisect_left(self._array, index)
            if pos == len(self._array) or self._array[pos] != index:
                return False
            del self._array[pos]
        else:
            bit = 1 << index
            if not self._bits & bit:
                return False
            self._bits &= ~bit
            self._count -= 1
        self.ensure_correct_store()
        return True

    def remove_range(self, start: int, end: int) -> int:
        """Remove every index in start..=end; return how many were present."""
        _check_index(start)
        _check_index(end)
        if start > end:
            return 0
        if self._kind is StoreKind.ARRAY:
            lo = bisect_left(self._array, start)
            hi = bisect_right(self._array, end)
            removed = hi - lo
            del self._array[lo:hi]
        else:
            mask = _range_mask(start, end)
            removed = (self._bits & mask).bit_count()
            self._bits &= ~mask
            self._count -= removed
        self.ensure_correct_store()
        return removed

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int) or not 0 <= index <= MAX_INDEX:
            return False
        if self._kind is StoreKind.ARRAY:
            pos = bisect_left(self._array, index)
            return pos < len(self._array) and self._array[pos] == index
        return bool(self._bits >> index & 1)

    def contains_range(self, start: int, end: int) -> bool:
        """Whether every index in start..=end is present."""
        _check_index(start)
        _check_index(end)
        if start > end:
            return True
        if self._kind is StoreKind.ARRAY:
            lo = bisect_left(self._array, start)
            hi = bisect_right(self._array, end)
            return hi - lo == end - start + 1
        mask = _range_mask(start, end)
        return self._bits & mask == mask

    def is_full(self) -> bool:
        return len(self) == BITMAP_BITS

    def is_disjoint(self, other: Container) -> bool:
        return self.intersection_len(other) == 0

    def is_subset(self, other: Container) -> bool:
        return len(self) <= len(other) and self.intersection_len(other) == len(self)

    def intersection_len(self, other: Container) -> int:
        if self._kind is StoreKind.ARRAY and other._kind is StoreKind.ARRAY:
            return len(set(self._array).intersection(other._array))
        if self._kind is StoreKind.ARRAY:
            return sum(1 for value in self._array if other._bits >> value & 1)
        if other._kind is StoreKind.ARRAY:
            return sum(1 for value in other._array if self._bits >> value & 1)
        return (self._bits & other._bits).bit_count()

    def min(self) -> int | None:
        if self._kind is StoreKind.ARRAY:
            return self._array[0] if self._array else None
        if not self._bits:
            return None
        return (self._bits & -self._bits).bit_length() - 1

    def max(self) -> int | None:
        if self._kind is StoreKind.ARRAY:
            return self._array[-1] if self._array else None
        if not self._bits:
            return None
        return self._bits.bit_length() - 1

    def rank(self, index: int) -> int:
        """Number of stored indices that are <= index."""
        _check_index(index)
        if self._kind is StoreKind.ARRAY:
            return bisect_right(self._array, index)
        return (self._bits & ((1 << (index + 1)) - 1)).bit_count()

    def select(self, n: int) -> int | None:
        """The n-th smallest index, or None when n is out of range."""
        if not 0 <= n < len(self):
            return None
        if self._kind is StoreKind.ARRAY:
            return self._array[n]
        remaining = n
        bits = self._bits
        base = 0
        while bits:
            word = bits & _WORD_MASK
            count = word.bit_count()
            if remaining < count:
                for _ in range(remaining):
                    word &= word - 1
                return base + (word & -word).bit_length() - 1
            remaining -= count
            bits >>= _WORD_BITS
            base += _WORD_BITS
        return None

    def ensure_correct_store(self) -> None:
        """Switch representation so that small sets are arrays and big ones bitmaps."""
        if self._kind is StoreKind.BITMAP:
            if self._count <= ARRAY_LIMIT:
                self._set_array(_bits_to_array(self._bits))
        elif len(self._array) > ARRAY_LIMIT:
            self._set_bits(_array_to_bits(self._array), len(self._array))

    def copy(self) -> Container:
        duplicate = Container(self.key)
        if self._kind is StoreKind.ARRAY:
            duplicate._set_array(list(self._array))
        else:
            duplicate._set_bits(self._bits, self._count)
        return duplicate

    def _apply(self, other: Container, name: str) -> None:
        if self._kind is StoreKind.ARRAY and other._kind is StoreKind.ARRAY:
            values = _SET_OPS[name](set(self._array), set(other._array))
            self._set_array(sorted(values))
        else:
            self._set_bits(_BIT_OPS[name](self._as_bits(), other._as_bits()))
        self.ensure_correct_store()

    def _combined(self, other: object, name: str) -> Container:
        if not isinstance(other, Container):
            return NotImplemented
        result = self.copy()
        result._apply(other, name)
        return result

    def _combine_in_place(self, other: object, name: str) -> Container:
        if not isinstance(other, Container):
            return NotImplemented
        self._apply(other, name)
        return self

    def __or__(self, other: object) -> Container:
        return self._combined(other, "or")

    def __ior__(self, other: object) -> Container:
        return self._combine_in_place(other, "or")

    def __and__(self, other: object) -> Container:
        return self._combined(other, "and")

    def __iand__(self, other: object) -> Container:
        return self._combine_in_place(other, "and")

    def __sub__(self, other: object) -> Container:
        return self._combined(other, "sub")

    def __isub__(self, other: object) -> Container:
        return self._combine_in_place(other, "sub")

    def __xor__(self, other: object) -> Container:
        return self._combined(other, "xor")

    def __ixor__(self, other: object) -> Container:
        return self._combine_in_place(other, "xor")

    def __iter__(self) -> Iterator[int]:
        base = self.key << 16
        return (base | index for index in list(self._as_array()))

    def __reversed__(self) -> Iterator[int]:
        base = self.key << 16
        return (base | index for index in reversed(list(self._as_array())))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Container):
            return NotImplemented
        if self.key != other.key or len(self) != len(other):
            return False
        if self._kind is StoreKind.ARRAY and other._kind is StoreKind.ARRAY:
            return self._array == other._array
        return self._as_bits() == other._as_bits()

    def __repr__(self) -> str:
        return f"Container<{len(self)} @ {self.key}>"


def pairs(
    left: Iterable[Container], right: Iterable[Container]
) -> Iterator[tuple[Container | None, Container | None]]:
    """Walk two key-sorted container sequences together, pairing equal keys."""
    left_iter = iter(left)
    right_iter = iter(right)
    lhs = next(left_iter, None)
    rhs = next(right_iter, None)
    while lhs is not None or rhs is not None:
        if rhs is None or (lhs is not None and lhs.key < rhs.key):
            yield lhs, None
            lhs = next(left_iter, None)
        elif lhs is None or rhs.key < lhs.key:
            yield None, rhs
            rhs = next(right_iter, None)
        else:
            yield lhs, rhs
            lhs = next(left_iter, None)
            rhs = next(right_iter, None)