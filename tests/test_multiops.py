from collections import Counter

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from roaringset import multiops
from roaringset.bitmap import RoaringBitmap

SUPPRESSED = [HealthCheck.too_slow, HealthCheck.data_too_large]


@st.composite
def bitmaps(draw):
    bitmap = RoaringBitmap()
    spans = draw(
        st.lists(
            st.tuples(
                st.integers(0, 5), st.integers(0, 65535), st.integers(0, 8000)
            ),
            max_size=3,
        )
    )
    for key, start, length in spans:
        low = key << 16 | start
        bitmap.insert_range(low, low + length)
    bitmap.extend(draw(st.lists(st.integers(0, 6 * 65536 - 1), max_size=40)))
    return bitmap


def empty_set():
    return RoaringBitmap()


# Multi-operand folds agree with every other way of computing them.


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps(), bitmaps())
def test_all_union_give_the_same_result(a, b, c):
    ref_assign = a.copy()
    ref_assign |= b
    ref_assign |= c
    inline = a | b | c
    multi = multiops.union([a, b, c])
    multi_gen = multiops.union(x for x in (a, b, c))
    assert ref_assign == inline == multi == multi_gen
    assert set(multi) == set(a) | set(b) | set(c)


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps(), bitmaps())
def test_all_intersection_give_the_same_result(a, b, c):
    ref_assign = a.copy()
    ref_assign &= b
    ref_assign &= c
    inline = a & b & c
    multi = multiops.intersection([a, b, c])
    multi_gen = multiops.intersection(x for x in (a, b, c))
    assert ref_assign == inline == multi == multi_gen
    assert set(multi) == set(a) & set(b) & set(c)


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps(), bitmaps())
def test_all_difference_give_the_same_result(a, b, c):
    ref_assign = a.copy()
    ref_assign -= b
    ref_assign -= c
    inline = a - b - c
    multi = multiops.difference([a, b, c])
    multi_gen = multiops.difference(x for x in (a, b, c))
    assert ref_assign == inline == multi == multi_gen
    assert set(multi) == set(a) - set(b) - set(c)


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps(), bitmaps())
def test_all_symmetric_difference_give_the_same_result(a, b, c):
    ref_assign = a.copy()
    ref_assign ^= b
    ref_assign ^= c
    inline = a ^ b ^ c
    multi = multiops.symmetric_difference([a, b, c])
    multi_gen = multiops.symmetric_difference(x for x in (a, b, c))
    assert ref_assign == inline == multi == multi_gen
    counts = Counter(chain_value for bm in (a, b, c) for chain_value in bm)
    assert set(multi) == {value for value, n in counts.items() if n % 2}


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps())
def test_multiops_leave_inputs_untouched(a, b):
    a_before, b_before = a.copy(), b.copy()
    multiops.union([a, b])
    multiops.intersection([a, b])
    multiops.difference([a, b])
    multiops.symmetric_difference([a, b])
    assert a == a_before
    assert b == b_before


@pytest.mark.parametrize(
    "op",
    [
        multiops.union,
        multiops.intersection,
        multiops.difference,
        multiops.symmetric_difference,
    ],
)
def test_no_bitmaps_give_empty(op):
    assert op([]) == RoaringBitmap()
    assert len(op(iter([]))) == 0


@pytest.mark.parametrize(
    "op",
    [
        multiops.union,
        multiops.intersection,
        multiops.difference,
        multiops.symmetric_difference,
    ],
)
def test_single_bitmap_is_returned_as_copy(op):
    only = RoaringBitmap(range(10, 5000))
    result = op([only])
    assert result == only
    result.insert(1)
    assert 1 not in only


def test_union_pinned_values():
    result = multiops.union(
        [RoaringBitmap(range(0, 2000)), RoaringBitmap(range(1000, 3000))]
    )
    assert result == RoaringBitmap(range(0, 3000))
    result = multiops.union(
        [RoaringBitmap(range(0, 4000)), RoaringBitmap(range(4000, 8000))]
    )
    assert result == RoaringBitmap(range(0, 8000))
    assert len(result) == 8000


def test_union_of_many_empty_bitmaps():
    assert multiops.union([RoaringBitmap() for _ in range(5)]) == RoaringBitmap()


def test_intersection_pinned_values():
    result = multiops.intersection(
        [
            RoaringBitmap(range(0, 12000)),
            RoaringBitmap(range(6000, 18000)),
            RoaringBitmap(range(5000, 7000)),
        ]
    )
    assert result == RoaringBitmap(range(6000, 7000))


def test_difference_pinned_values():
    result = multiops.difference(
        [
            RoaringBitmap(range(0, 12000)),
            RoaringBitmap(range(6000, 18000)),
            RoaringBitmap(range(0, 1000)),
        ]
    )
    assert result == RoaringBitmap(range(1000, 6000))


def test_difference_with_empty_first_is_empty():
    assert multiops.difference([RoaringBitmap(), RoaringBitmap([1, 2])]) == empty_set()


def test_symmetric_difference_cancels_pairs():
    a = RoaringBitmap(range(0, 6000))
    result = multiops.symmetric_difference([a, a, RoaringBitmap([7, 70000])])
    assert list(result) == [7, 70000]


def test_long_generator_is_consumed():
    pieces = (RoaringBitmap([n, 100000 + n]) for n in range(120))
    result = multiops.union(pieces)
    assert len(result) == 240
    assert result.max() == 100119


def test_long_intersection_generator():
    pieces = (RoaringBitmap(range(n, 5000)) for n in range(80))
    assert multiops.intersection(pieces) == RoaringBitmap(range(79, 5000))


@pytest.mark.parametrize(
    "op",
    [
        multiops.union,
        multiops.intersection,
        multiops.difference,
        multiops.symmetric_difference,
    ],
)
def test_non_bitmap_rejected(op):
    with pytest.raises(TypeError):
        op([{1, 2}, RoaringBitmap([1])])


# Algebraic properties of the set operations.


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps())
def test_operations_are_commutative(a, b):
    assert a | b == b | a
    assert a & b == b & a
    assert a ^ b == b ^ a
    assert multiops.union([a, b]) == multiops.union([b, a])
    assert multiops.intersection([a, b]) == multiops.intersection([b, a])
    assert multiops.symmetric_difference([a, b]) == multiops.symmetric_difference(
        [b, a]
    )


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps(), bitmaps())
def test_operations_are_associative(a, b, c):
    assert a | (b | c) == (a | b) | c
    assert a & (b & c) == (a & b) & c
    assert a ^ (b ^ c) == (a ^ b) ^ c
    assert multiops.union([b, c, a]) == multiops.union([a, b, c])
    assert multiops.intersection([b, c, a]) == multiops.intersection([a, b, c])


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps(), bitmaps())
def test_distributive_laws(a, b, c):
    assert a | (b & c) == (a | b) & (a | c)
    assert a & (b | c) == (a & b) | (a & c)
    assert a & (b ^ c) == (a & b) ^ (a & c)
    assert multiops.union([a, multiops.intersection([b, c])]) == multiops.intersection(
        [multiops.union([a, b]), multiops.union([a, c])]
    )


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps())
def test_identity_idempotence_and_domination(a):
    assert a | empty_set() == a
    assert a ^ empty_set() == a
    assert a | a == a
    assert a & a == a
    assert a & empty_set() == empty_set()
    assert multiops.union([a, empty_set()]) == a
    assert multiops.union([a, a]) == a
    assert multiops.intersection([a, a]) == a
    assert multiops.intersection([a, empty_set()]) == empty_set()
    assert multiops.symmetric_difference([a, empty_set()]) == a


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps())
def test_reflexivity_and_antisymmetry(a):
    assert a.is_subset(a)
    b = a.copy()
    assert a == b
    b ^= RoaringBitmap([0])
    assert a != b
    assert not (a.is_subset(b) and b.is_subset(a))


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps(), bitmaps())
def test_transitivity(a, b, c):
    b = multiops.union([b, a])
    c = multiops.union([c, b])
    assert a.is_subset(b)
    assert b.is_subset(c)
    assert a.is_subset(c)


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps())
def test_joins_meets_and_inclusion(b, c):
    assert b.is_subset(b | c)
    assert (b & c).is_subset(b)
    a = b - c
    assert a.is_subset(b)
    assert a & b == a
    assert a | b == b
    assert a - b == empty_set()


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps(), bitmaps())
def test_relative_complements(a, b, c):
    u = multiops.union([a, b, c])
    assert c - (a & b) == (c - a) | (c - b)
    assert c - (a | b) == (c - a) & (c - b)
    assert c - (b - a) == (a & c) | (c - b)
    x = (b - a) & c
    y = (b & c) - a
    z = b & (c - a)
    assert x == y == z
    assert (b - a) | c == (b | c) - (a - c)
    assert (b - a) - c == b - (a | c)
    assert multiops.difference([b, a, c]) == b - (a | c)
    assert a - a == empty_set()
    assert empty_set() - a == empty_set()
    assert a - u == empty_set()
    assert multiops.difference([a, u]) == empty_set()


@settings(max_examples=25, deadline=None, suppress_health_check=SUPPRESSED)
@given(bitmaps(), bitmaps(), bitmaps())
def test_symmetric_difference_properties(a, b, c):
    assert (a ^ b) ^ (b ^ c) == a ^ c
    assert a ^ a == empty_set()
    assert multiops.symmetric_difference([a, a]) == empty_set()
    assert a ^ b == (a - b) | (b - a)
    assert a ^ b == (a | b) - (a & b)
    assert multiops.symmetric_difference([a, b]) == multiops.difference(
        [multiops.union([a, b]), multiops.intersection([a, b])]
    )
    assert (a ^ b).is_disjoint(a & b)