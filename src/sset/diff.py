"""Structural diff between two set snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .combinators.ops import two_set_operations

if TYPE_CHECKING:
    from .sset import SSet


@dataclass(frozen=True)
class SSetChanges:
    """Minimal edit between two snapshots.

    Attributes:
        union: Items to add (present in the target only)
        difference: Items to remove (present in the source only)
    """

    union: SSet
    difference: SSet

    def is_empty(self) -> bool:
        return self.union.is_empty() and self.difference.is_empty()

    def inverted(self) -> SSetChanges:
        """The edit that undoes this one."""
        return SSetChanges(union=self.difference, difference=self.union)


@dataclass(frozen=True)
class SSetDiff:
    """Changes turning ``source`` into ``target``, with both snapshots kept."""

    source: SSet
    target: SSet
    changes: SSetChanges

    @property
    def union(self) -> SSet:
        return self.changes.union

    @property
    def difference(self) -> SSet:
        return self.changes.difference

    def is_empty(self) -> bool:
        return self.changes.is_empty()

    def inverted(self) -> SSetDiff:
        return SSetDiff(source=self.target, target=self.source, changes=self.changes.inverted())


def changes_between(source: SSet, target: SSet) -> SSetDiff:
    """Diff from ``source`` to ``target`` computed in one algebra pass."""
    parts = two_set_operations(("difference", "opposite_difference"), source, target)
    return SSetDiff(
        source=source,
        target=target,
        changes=SSetChanges(union=parts["opposite_difference"], difference=parts["difference"]),
    )


def apply_changes(base: SSet, changes: SSetChanges | SSetDiff) -> SSet:
    return base.union(changes.union).difference(changes.difference)


def revert_changes(base: SSet, changes: SSetChanges | SSetDiff) -> SSet:
    return base.union(changes.difference).difference(changes.union)
