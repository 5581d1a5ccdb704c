"""Binary set algebra in a single pass over the smaller operand.

Semantics:
    - Traverse only the smaller operand, in identity-key order
    - Test membership against the larger operand once per item
    - Feed that one answer to every requested operation
    - Never mutate either operand

Seeds:
    - union: the larger operand, merging items it lacks
    - intersection: the smaller operand, dropping items the larger lacks
    - difference (set1 - set2): set1, dropping items found in both
    - opposite_difference (set2 - set1): set2, dropping items found in both
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Literal

from sset.kernel.canonical import Canonical
from sset.kernel.config import SSetConfig

if TYPE_CHECKING:
    from sset.sset import SSet

Operation = Literal["union", "difference", "opposite_difference", "intersection"]

# (accumulator, key, value, key config, larger operand has it) -> accumulator
Reducer = Callable[["SSet", str, Canonical, SSetConfig, bool], "SSet"]


def order_by_size(set1: SSet, set2: SSet) -> tuple[SSet, SSet]:
    """Return (smallest, largest). Ties treat set1 as the largest."""
    if set1.size < set2.size:
        return set1, set2
    return set2, set1


def _drop_shared(acc: SSet, key: str, value: Canonical, config: SSetConfig, larger_has: bool) -> SSet:
    return acc._without(key, value, config) if larger_has else acc


def _keep_shared(acc: SSet, key: str, value: Canonical, config: SSetConfig, larger_has: bool) -> SSet:
    return acc if larger_has else acc._without(key, value, config)


def _merge_missing(acc: SSet, key: str, value: Canonical, config: SSetConfig, larger_has: bool) -> SSet:
    return acc if larger_has else acc._with(key, value, config)


def operation_reducers(
    set1: SSet, set2: SSet, smallest: SSet, largest: SSet
) -> dict[Operation, tuple[SSet, Reducer]]:
    """Seed and reducer for each operation.

    Differences depend on direction, so their seeds follow set1/set2 rather
    than the size ordering.
    """
    return {
        "union": (largest, _merge_missing),
        "intersection": (smallest, _keep_shared),
        "difference": (set1, _drop_shared),
        "opposite_difference": (set2, _drop_shared),
    }


def two_set_operations(operations: Iterable[Operation], set1: SSet, set2: SSet) -> dict[Operation, SSet]:
    """Compute several binary operations over set1 and set2 at once.

    Args:
        operations: Names of the operations to compute
        set1: Left operand (the minuend of ``difference``)
        set2: Right operand (the minuend of ``opposite_difference``)

    Returns:
        Mapping from each requested operation to its resulting set
    """
    smallest, largest = order_by_size(set1, set2)
    reducers = operation_reducers(set1, set2, smallest, largest)
    queue = {name: reducers[name][1] for name in operations}
    results: dict[Operation, SSet] = {name: reducers[name][0] for name in queue}

    config = smallest.config
    by_key = config == largest.config
    for key, value in smallest.items():
        larger_has = largest.has_hash(key) if by_key else largest.has(value)
        for name, reduce in queue.items():
            results[name] = reduce(results[name], key, value, config, larger_has)
    return results


def symmetric_difference(set1: SSet, set2: SSet) -> SSet:
    """Items in exactly one operand: union minus intersection."""
    results = two_set_operations(("union", "intersection"), set1, set2)
    return results["union"].difference(results["intersection"])
