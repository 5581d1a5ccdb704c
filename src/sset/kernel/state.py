"""Persistent state store - immutable member map, size and plugin data."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from collections.abc import Iterator
from typing import Any, Self

from pyrsistent import PMap, freeze, pmap, thaw

from .canonical import Canonical, canonicalize, hash_canonical
from .config import DEFAULT_CONFIG, SSetConfig
from .errors import ValueAlreadyExists, ValueNotFound


@dataclass(frozen=True)
class SSetState:
    """Immutable record of identity key -> canonical value.

    Members are stored frozen and thawed into fresh plain values on every
    read, so callers never hold the stored objects.

    Attributes:
        members: Persistent map from identity key to frozen canonical value
        size: Number of members
        plugins: Active plugin definitions by name
        aggregates: Aggregate state by plugin name
        config: Hashing options shared by every derived state
    """

    members: PMap = field(default_factory=pmap)
    size: int = 0
    plugins: PMap = field(default_factory=pmap)
    aggregates: PMap = field(default_factory=pmap)
    config: SSetConfig = DEFAULT_CONFIG

    def key_of(self, value: Any) -> tuple[str, Canonical]:
        """Canonicalize a value and derive its identity key under this config."""
        canonical = canonicalize(value, self.config)
        return hash_canonical(canonical, self.config), canonical

    def has(self, value: Any) -> bool:
        key, _ = self.key_of(value)
        return key in self.members

    def has_hash(self, key: str) -> bool:
        return key in self.members

    def get_by_hash(self, key: str) -> Canonical:
        if key not in self.members:
            raise ValueNotFound.for_key(key)
        return thaw(self.members[key])

    def sorted_keys(self) -> list[str]:
        """Identity keys in ascending order (the canonical iteration order)."""
        return sorted(self.members)

    def items(self) -> Iterator[tuple[str, Canonical]]:
        """(key, plain value) pairs in key order over the current members."""
        members = self.members
        return ((key, thaw(members[key])) for key in sorted(members))

    def insert_canonical(self, key: str, canonical: Canonical) -> tuple[Self, bool]:
        """Insert an already hashed value; returns the same state if present."""
        if key in self.members:
            return self, False
        return replace(self, members=self.members.set(key, freeze(canonical)), size=self.size + 1), True

    def delete_key(self, key: str) -> Self:
        """Drop an entry by key. Raises ValueNotFound if absent."""
        if key not in self.members:
            raise ValueNotFound.for_key(key)
        return replace(self, members=self.members.remove(key), size=self.size - 1)

    def merge(self, value: Any) -> tuple[Self, bool, str, Canonical]:
        """Insert a value if new.

        Returns:
            (next state, whether the value was new, its key, its canonical form)
        """
        key, canonical = self.key_of(value)
        state, added = self.insert_canonical(key, canonical)
        return state, added, key, canonical

    def add(self, value: Any) -> tuple[Self, str, Canonical]:
        """Insert a value that must not be present yet."""
        key, canonical = self.key_of(value)
        if key in self.members:
            raise ValueAlreadyExists(canonical, key)
        state, _ = self.insert_canonical(key, canonical)
        return state, key, canonical

    def remove(self, value: Any) -> tuple[Self, str, Canonical]:
        """Remove a present value. Raises ValueNotFound if absent."""
        key, canonical = self.key_of(value)
        if key not in self.members:
            raise ValueNotFound.for_value(canonical, key)
        return self.delete_key(key), key, canonical

    def with_plugins(self, plugins: PMap, aggregates: PMap) -> Self:
        return replace(self, plugins=plugins, aggregates=aggregates)
