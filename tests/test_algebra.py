"""Tests for union, difference, intersection and the laws they satisfy."""

from __future__ import annotations

import pytest

from sset import SSet, SSetConfig, counter_plugin
from sset.combinators import order_by_size, two_set_operations

PAIRS = [
    ([], []),
    ([1, 2, 3], []),
    ([], ["x"]),
    ([1, 2, 3], [2, 3, 4]),
    ([1], [1, 2, 3, 4, 5]),
    ([1, 2, 3, 4, 5], [5]),
    (["a", {"k": 1}], [{"k": 1}, ["a"]]),
    ([1, 2], [3, 4]),
    ([1, 2], [1, 2]),
]


def as_sorted(s: SSet) -> list:
    return sorted(s.to_array(), key=repr)


def test_scenario_union_difference_intersection() -> None:
    a = SSet.from_array([1, 2, 3])
    b = SSet.from_array([2, 3, 4])

    assert sorted(a.union(b).to_array()) == [1, 2, 3, 4]
    assert sorted(a.difference(b).to_array()) == [1]
    assert sorted(a.opposite_difference(b).to_array()) == [4]
    assert sorted(a.intersection(b).to_array()) == [2, 3]
    assert sorted(a.symmetric_difference(b).to_array()) == [1, 4]


def test_operators() -> None:
    a = SSet.from_array([1, 2, 3])
    b = SSet.from_array([2, 3, 4])
    assert (a | b).equals(a.union(b))
    assert (a & b).equals(a.intersection(b))
    assert (a - b).equals(a.difference(b))
    assert (a ^ b).equals(a.symmetric_difference(b))


@pytest.mark.parametrize("left,right", PAIRS)
def test_union_is_at_least_as_large_as_either(left: list, right: list) -> None:
    a, b = SSet.from_array(left), SSet.from_array(right)
    assert len(a.union(b)) >= max(len(a), len(b))
    assert a.union(b).is_superset(a)
    assert a.union(b).is_superset(b)


@pytest.mark.parametrize("left,right", PAIRS)
def test_intersection_is_subset_of_both(left: list, right: list) -> None:
    a, b = SSet.from_array(left), SSet.from_array(right)
    common = a.intersection(b)
    assert common.is_subset(a)
    assert common.is_subset(b)


@pytest.mark.parametrize("left,right", PAIRS)
def test_difference_direction_does_not_depend_on_size(left: list, right: list) -> None:
    a, b = SSet.from_array(left), SSet.from_array(right)
    expected = [item for item in left if item not in right]
    assert as_sorted(a.difference(b)) == sorted(expected, key=repr)
    assert a.opposite_difference(b).equals(b.difference(a))


@pytest.mark.parametrize("left,right", PAIRS)
def test_equality_matches_empty_symmetric_difference(left: list, right: list) -> None:
    a, b = SSet.from_array(left), SSet.from_array(right)
    assert a.equals(b) == a.symmetric_difference(b).is_empty()
    assert (a == b) == a.equals(b)


def test_difference_when_self_is_smaller() -> None:
    small = SSet.from_array([1, 9])
    large = SSet.from_array([1, 2, 3, 4])
    assert sorted(small.difference(large).to_array()) == [9]
    assert sorted(large.difference(small).to_array()) == [2, 3, 4]


def test_equal_sizes_treat_first_operand_as_largest() -> None:
    a = SSet.from_array([1, 2])
    b = SSet.from_array([3, 4])
    smallest, largest = order_by_size(a, b)
    assert largest is a
    assert smallest is b


def test_operations_with_self() -> None:
    a = SSet.from_array([1, 2, 3])
    assert a.union(a).equals(a)
    assert a.intersection(a).equals(a)
    assert a.difference(a).is_empty()
    assert a.symmetric_difference(a).is_empty()


def test_operands_are_not_modified() -> None:
    a = SSet.from_array([1, 2, 3])
    b = SSet.from_array([3, 4])
    a.union(b)
    a.difference(b)
    a.intersection(b)
    a.symmetric_difference(b)
    assert sorted(a.to_array()) == [1, 2, 3]
    assert sorted(b.to_array()) == [3, 4]


def test_several_operations_in_one_pass() -> None:
    a = SSet.from_array([1, 2, 3])
    b = SSet.from_array([3, 4])
    results = two_set_operations(
        ("union", "difference", "opposite_difference", "intersection"), a, b
    )
    assert sorted(results["union"].to_array()) == [1, 2, 3, 4]
    assert sorted(results["difference"].to_array()) == [1, 2]
    assert sorted(results["opposite_difference"].to_array()) == [4]
    assert sorted(results["intersection"].to_array()) == [3]


def test_union_seeds_at_larger_operand() -> None:
    """Plugins of the larger operand observe merged items."""
    a = SSet.from_array([1, 2, 3], plugins={"counter": counter_plugin()})
    b = SSet.from_array([3, 4])
    assert a.union(b).query("counter") == 4
    assert b.union(a).query("counter") == 4


def test_subset_superset_and_disjoint() -> None:
    a = SSet.from_array([1, 2])
    b = SSet.from_array([1, 2, 3])
    c = SSet.from_array([7])

    assert a.is_subset(b)
    assert a.in_set(b)
    assert b.is_superset(a)
    assert b.has_set(a)
    assert not b.is_subset(a)
    assert a.is_disjoint(c)
    assert not a.is_disjoint(b)


def test_mixed_configs() -> None:
    a = SSet.from_array([1, 2, 3])
    b = SSet.from_array([2, 3, 4], config=SSetConfig(hash_algorithm="md5"))

    union = a.union(b)
    assert sorted(union.to_array()) == [1, 2, 3, 4]
    assert union.has(4)
    assert sorted(a.intersection(b).to_array()) == [2, 3]
    assert sorted(a.difference(b).to_array()) == [1]
    assert sorted(b.difference(a).to_array()) == [4]
