# roaringset

`roaringset` provides `RoaringBitmap`, a compressed set of unsigned 32-bit
integers (0 to 4294967295) that uses the Roaring bitmap scheme. Values are
grouped by their upper 16 bits. A group is stored as a sorted array while it
holds 4096 values or fewer. Once it holds more, it is stored as a dense
65536-bit bitmap.

The package depends only on the standard library.

## Installation

```
pip install .
```

To install it together with the test dependencies (pytest, hypothesis):

```
pip install ".[test]"
```

## Usage

```python
from roaringset.bitmap import RoaringBitmap

rb = RoaringBitmap([2, 3, 5, 7])
rb.insert(11)                  # True: the value was absent
rb.insert(11)                  # False: already present
rb.push(13)                    # True: added, because 13 is above the maximum
rb.push(4)                     # False: not above the maximum, so not added
3 in rb                        # True
len(rb)                        # 6
rb.min(), rb.max()             # (2, 13)
rb.rank(5)                     # 3: the values <= 5 are 2, 3 and 5
rb.select(0)                   # 2, the smallest value; None past the end
rb.remove(13)                  # True

rb.insert_range(100, 200)      # half-open [100, 200); returns how many were new
rb.contains_range(100, 200)    # True; an empty range is always contained
rb.range_cardinality(0, 150)   # number of values in [0, 150)
rb.remove_range(150, 200)      # returns how many were removed

RoaringBitmap.full().is_full() # True: every 32-bit value
rb.clear(); rb.is_empty()      # True
```

Values outside 0..2**32-1 raise `ValueError` in `insert`, `remove`, `push`,
`contains` and `rank`. The `in` operator returns `False` for such values
instead of raising. Range bounds must lie in 0..2**32. A negative position
passed to `select` raises `ValueError`.

### Set algebra

```python
a = RoaringBitmap(range(1, 4))
b = RoaringBitmap(range(3, 6))

a | b, a & b, a - b, a ^ b     # new bitmaps
a |= b                         # in place; likewise &=, -=, ^=

a.intersection_len(b)          # sizes, without building a new bitmap
a.union_len(b)
a.difference_len(b)
a.symmetric_difference_len(b)

a.is_disjoint(b), a.is_subset(b), a.is_superset(b)
a.copy() == a                  # True
```

Operations over many bitmaps at once are in `roaringset.multiops`:

```python
from roaringset import multiops

multiops.union([a, b, c])
multiops.intersection([a, b, c])          # empty bitmap for no input
multiops.difference([a, b, c])            # a - b - c
multiops.symmetric_difference([a, b, c])  # values found in an odd number of them
```

Passing anything other than a `RoaringBitmap` to these functions raises
`TypeError`.

### Sorted input

`from_sorted_iter` and `append` accept only strictly increasing values.
`append` also requires every value to be greater than the current maximum.
When a value breaks this order, both raise `NonSortedIntegers`, a subclass of
`ValueError`. Its `valid_until` attribute gives the number of values added
before the bad one. Those values stay in the bitmap.

```python
from roaringset.iteration import NonSortedIntegers

rb = RoaringBitmap.from_sorted_iter(range(10))
try:
    rb.append([20, 30, 25])
except NonSortedIntegers as err:
    err.valid_until            # 2
```

### Iteration

Iterating over a bitmap gives its values in ascending order. `reversed(rb)`
gives them in descending order. `rb.iter()` returns a `BitmapIterator`:
`next(it)` takes the smallest remaining value, and `it.next_back()` takes the
largest, returning `None` once nothing is left. `len(it)` and
`it.size_hint()` report how many values remain.

### Lower-level modules

- `roaringset.container` holds `Container`, the 16-bit chunk type, and
  `StoreKind`.
- `roaringset.algebra` and `roaringset.ranges` run set and range operations
  over key-sorted lists of containers.

`RoaringBitmap` is built on these modules.

## What it does not do

- Values are limited to 32 bits. There is no set type for 64-bit integers.
- Bitmaps cannot be written to or read from bytes or files. There is no
  serialization format.
- Bitmaps are mutable and not hashable.