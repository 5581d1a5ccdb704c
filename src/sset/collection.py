"""Collection - field-predicate lookup over a set of record-like values."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from .kernel.canonical import Canonical, canonicalize, encode
from .kernel.config import SSetConfig
from .sset import SSet


def _matches(item: Canonical, criteria: Mapping[str, Canonical]) -> bool:
    if not isinstance(item, dict):
        return False
    # Compare encodings so True never matches 1
    return all(name in item and encode(item[name]) == encode(expected) for name, expected in criteria.items())


@dataclass(frozen=True, eq=False, repr=False)
class Collection:
    """Immutable set of records with lookup by field values.

    Lookups are linear scans in iteration order. Non-mapping members are
    never matched by a lookup.
    """

    _set: SSet = field(default_factory=SSet)

    @classmethod
    def from_array(cls, values: Iterable[Any], config: SSetConfig | None = None) -> Collection:
        return cls(SSet.from_array(values, config=config))

    @property
    def sset(self) -> SSet:
        """The underlying set."""
        return self._set

    @property
    def size(self) -> int:
        return self._set.size

    def __len__(self) -> int:
        return self._set.size

    def __iter__(self) -> Iterator[Canonical]:
        return iter(self._set)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Collection):
            return NotImplemented
        return self._set.equals(other._set)

    __hash__ = None  # type: ignore[assignment]

    def has(self, item: Any) -> bool:
        return self._set.has(item)

    def add(self, item: Any) -> Collection:
        return Collection(self._set.add(item))

    def remove(self, item: Any) -> Collection:
        return Collection(self._set.remove(item))

    def union(self, other: Collection) -> Collection:
        return Collection(self._set.union(other._set))

    def map(self, fn: Callable[[Canonical], Any]) -> Collection:
        return Collection(self._set.map(fn))

    def find(self, criteria: Mapping[str, Any] | None = None, **fields: Any) -> Collection:
        """Members whose fields equal every given field.

        Args:
            criteria: Field values to match (use for names like ``from``)
            **fields: Additional field values to match
        """
        wanted = canonicalize({**(criteria or {}), **fields}, self._set.config)
        return Collection(
            SSet.from_array((item for item in self if _matches(item, wanted)), config=self._set.config)
        )

    def find_one(self, criteria: Mapping[str, Any] | None = None, **fields: Any) -> Canonical | None:
        """First matching member in iteration order, or None."""
        wanted = canonicalize({**(criteria or {}), **fields}, self._set.config)
        return next((item for item in self if _matches(item, wanted)), None)

    def to_array(self) -> list[Canonical]:
        return self._set.to_array()

    def to_json(self) -> dict[str, Any]:
        """Serialized form of the underlying set."""
        return self._set.to_json()

    def __repr__(self) -> str:
        return f"Collection({self.to_array()!r})"
