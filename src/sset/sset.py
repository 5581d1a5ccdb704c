"""SSet - persistent, content-addressed set of serialization-safe values."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from .combinators.ops import symmetric_difference, two_set_operations
from .diff import SSetChanges, SSetDiff, apply_changes, changes_between, revert_changes
from .kernel.canonical import Canonical, hash_of
from .kernel.config import DEFAULT_CONFIG, SSetConfig
from .kernel.errors import InvalidMergeArgument
from .kernel.plugin import Plugin
from .kernel.state import SSetState
from .runtime.plugins import registry
from .structured.codec import decode_state, encode_state

R = TypeVar("R")


@dataclass(frozen=True)
class MergeResult:
    """Outcome of ``SSet.merge_detailed``.

    Attributes:
        value: The resulting set
        added: Whether the value was new
        key: Identity key of the merged value
    """

    value: SSet
    added: bool
    key: str


@dataclass(frozen=True, eq=False, repr=False)
class SSet:
    """Content-addressed set: members are compared by structure, not identity.

    Every modification returns a new SSet; existing instances never change.
    Iteration order is ascending identity key, not insertion order.

    Prefer ``SSet.from_array``/``SSet.from_json`` over the constructor.
    """

    _state: SSetState = field(default_factory=SSetState)

    # -- construction -----------------------------------------------------

    @classmethod
    def empty(cls, config: SSetConfig | None = None) -> SSet:
        return cls(SSetState(config=config or DEFAULT_CONFIG))

    @classmethod
    def from_array(
        cls,
        values: Iterable[Any],
        plugins: Mapping[str, Plugin[Any]] | None = None,
        config: SSetConfig | None = None,
    ) -> SSet:
        """Build a set from values, merging duplicates.

        Plugins are activated first, so they observe every insertion.
        """
        base = cls.empty(config)
        if plugins:
            base = base.add_plugins(plugins)
        return base.merge_all(values)

    from_iterable = from_array

    @classmethod
    def from_json(
        cls,
        data: Mapping[str, Any] | str | bytes,
        plugins: Mapping[str, Plugin[Any]] | None = None,
        config: SSetConfig | None = None,
    ) -> SSet:
        """Rebuild a set from its serialized form.

        Args:
            data: Envelope as a mapping or JSON text
            plugins: Plugins to activate; their aggregates are read from ``props``
            config: Hashing options for the rebuilt set

        Raises:
            SerializationError: If the envelope is malformed
            CanonicalizationFailure: If a member cannot be canonicalized
        """
        return cls(decode_state(data, plugins, config))

    @staticmethod
    def hash_of(value: Any, config: SSetConfig = DEFAULT_CONFIG) -> str:
        return hash_of(value, config)

    # -- state access -----------------------------------------------------

    @property
    def state(self) -> SSetState:
        return self._state

    @property
    def config(self) -> SSetConfig:
        return self._state.config

    @property
    def size(self) -> int:
        return self._state.size

    def __len__(self) -> int:
        return self._state.size

    def is_empty(self) -> bool:
        return self._state.size == 0

    def has(self, value: Any) -> bool:
        """Check whether a structurally equal value is a member."""
        return self._state.has(value)

    def __contains__(self, value: Any) -> bool:
        return self._state.has(value)

    def has_hash(self, key: str) -> bool:
        return self._state.has_hash(key)

    def get_by_hash(self, key: str) -> Canonical:
        """Member stored under an identity key. Raises ValueNotFound if absent."""
        return self._state.get_by_hash(key)

    def keys(self) -> list[str]:
        """Identity keys in iteration order."""
        return self._state.sorted_keys()

    def items(self) -> Iterator[tuple[str, Canonical]]:
        """(key, value) pairs over a snapshot taken at call time.

        Values are fresh copies; changing them never affects the set.
        """
        return self._state.items()

    # -- mutation ---------------------------------------------------------

    def _transition(self, state: SSetState, event: registry.Event, value: Canonical) -> SSet:
        return SSet(registry.notify(state, event, value))

    def add(self, value: Any) -> SSet:
        """Add a value that is not yet a member.

        Raises:
            ValueAlreadyExists: If a structurally equal value is present
            CanonicalizationFailure: If the value is not serialization-safe
        """
        if isinstance(value, SSet):
            raise InvalidMergeArgument()
        state, _, canonical = self._state.add(value)
        return self._transition(state, "add", canonical)

    def merge(self, value: Any) -> SSet:
        """Like ``add``, but returns an equal set when the value is present."""
        return self.merge_detailed(value).value

    def merge_detailed(self, value: Any) -> MergeResult:
        """Merge a value and report whether it was new."""
        if isinstance(value, SSet):
            raise InvalidMergeArgument()
        state, added, key, canonical = self._state.merge(value)
        if not added:
            return MergeResult(value=self, added=False, key=key)
        return MergeResult(value=self._transition(state, "add", canonical), added=True, key=key)

    def merge_all(self, values: Iterable[Any]) -> SSet:
        """Merge every value of an iterable, ignoring those already present."""
        result = self
        for value in values:
            result = result.merge(value)
        return result

    def remove(self, value: Any) -> SSet:
        """Remove a member.

        Raises:
            ValueNotFound: If no structurally equal value is present
        """
        state, _, canonical = self._state.remove(value)
        return self._transition(state, "remove", canonical)

    def _with(self, key: str, value: Canonical, config: SSetConfig) -> SSet:
        # key/value were computed under ``config``; rehash if ours differs
        if config != self._state.config:
            key, value = self._state.key_of(value)
        state, added = self._state.insert_canonical(key, value)
        return self._transition(state, "add", value) if added else self

    def _without(self, key: str, value: Canonical, config: SSetConfig) -> SSet:
        if config != self._state.config:
            key, value = self._state.key_of(value)
        return self._transition(self._state.delete_key(key), "remove", value)

    # -- plugins ----------------------------------------------------------

    def add_plugins(self, plugins: Mapping[str, Plugin[Any]]) -> SSet:
        """Activate plugins and initialize their aggregates.

        Raises:
            PluginAlreadyActive: If any name is already active
        """
        return SSet(registry.add_plugins(self._state, plugins))

    def remove_plugins(self, names: Iterable[str]) -> SSet:
        """Deactivate plugins, discarding their aggregates."""
        return SSet(registry.remove_plugins(self._state, names))

    def only_use_plugins(self, plugins: Mapping[str, Plugin[Any]]) -> SSet:
        """Keep exactly the given plugins active, retaining known aggregates."""
        return SSet(registry.only_use_plugins(self._state, plugins))

    def active_plugins(self) -> list[str]:
        return registry.active_plugins(self._state)

    def query(self, name: str) -> Any:
        """API exposed by an active plugin.

        Raises:
            PluginNotActive: If ``name`` is not active
        """
        return registry.query(self._state, name)

    # -- set algebra ------------------------------------------------------

    def union(self, other: SSet) -> SSet:
        return two_set_operations(("union",), self, other)["union"]

    def difference(self, other: SSet) -> SSet:
        """Members of self absent from other."""
        return two_set_operations(("difference",), self, other)["difference"]

    def opposite_difference(self, other: SSet) -> SSet:
        """Members of other absent from self."""
        return two_set_operations(("opposite_difference",), self, other)["opposite_difference"]

    def intersection(self, other: SSet) -> SSet:
        return two_set_operations(("intersection",), self, other)["intersection"]

    def symmetric_difference(self, other: SSet) -> SSet:
        return symmetric_difference(self, other)

    __or__ = union
    __and__ = intersection
    __sub__ = difference
    __xor__ = symmetric_difference

    def is_subset(self, other: SSet) -> bool:
        return self.difference(other).is_empty()

    def is_superset(self, other: SSet) -> bool:
        return other.difference(self).is_empty()

    # Aliases
    in_set = is_subset
    has_set = is_superset

    def is_disjoint(self, other: SSet) -> bool:
        return self.intersection(other).is_empty()

    def equals(self, other: SSet) -> bool:
        """Structural equality: same members, regardless of plugins."""
        if self.size != other.size:
            return False
        return self.symmetric_difference(other).is_empty()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SSet):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    # -- diff -------------------------------------------------------------

    def changes_to(self, target: SSet) -> SSetDiff:
        """Changes turning this set into ``target``."""
        return changes_between(self, target)

    def changes_from(self, source: SSet) -> SSetDiff:
        """Changes turning ``source`` into this set."""
        return changes_between(source, self)

    def apply_changes(self, changes: SSetChanges | SSetDiff) -> SSet:
        return apply_changes(self, changes)

    def revert_changes(self, changes: SSetChanges | SSetDiff) -> SSet:
        return revert_changes(self, changes)

    # -- iteration --------------------------------------------------------

    def __iter__(self) -> Iterator[Canonical]:
        return (value for _, value in self.items())

    def for_each(self, fn: Callable[[Canonical], Any]) -> None:
        for item in self:
            fn(item)

    def map(self, fn: Callable[[Canonical], Any]) -> SSet:
        """New set of transformed items; items mapping to equal values collapse."""
        return SSet.empty(self.config).merge_all(fn(item) for item in self)

    def filter(self, fn: Callable[[Canonical], bool]) -> SSet:
        """Subset of members satisfying ``fn``."""
        result = self
        for key, value in self.items():
            if not fn(value):
                result = result._without(key, value, self.config)
        return result

    def reduce(self, fn: Callable[[R, Canonical], R], initial: R) -> R:
        acc = initial
        for item in self:
            acc = fn(acc, item)
        return acc

    def every(self, fn: Callable[[Canonical], bool]) -> bool:
        return all(fn(item) for item in self)

    def some(self, fn: Callable[[Canonical], bool]) -> bool:
        return any(fn(item) for item in self)

    def find(self, fn: Callable[[Canonical], bool]) -> Canonical | None:
        """First member in iteration order satisfying ``fn``, or None."""
        return next((item for item in self if fn(item)), None)

    def to_array(self) -> list[Canonical]:
        return list(self)

    # -- serialization ----------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        """Serialized form: ``{"props": {...}, "state": [...]}``."""
        return encode_state(self._state).model_dump()

    def dumps(self) -> str:
        return encode_state(self._state).model_dump_json()

    def __repr__(self) -> str:
        return f"SSet({self.to_array()!r})"
