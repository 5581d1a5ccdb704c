"""Plugin protocol - observers that keep derived aggregate state per set."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

if TYPE_CHECKING:
    from .state import SSetState

A = TypeVar("A")


class Plugin(Protocol[A]):
    """Protocol for set plugins.

    All hooks must be pure: they receive an aggregate and return the next
    one, and never see or alter the member map on add/remove.
    """

    def on_init(self, state: SSetState) -> A:
        """Build the initial aggregate from the state the plugin joins."""
        ...

    def on_add(self, aggregate: A, value: Any) -> A:
        """Fold a newly added value into the aggregate."""
        ...

    def on_remove(self, aggregate: A, value: Any) -> A:
        """Fold a removed value out of the aggregate."""
        ...

    def query(self, state: SSetState, aggregate: A) -> Any:
        """Expose the plugin API for the current state and aggregate."""
        ...

    def dump(self, aggregate: A) -> Any:
        """Convert the aggregate to a serialization-safe value."""
        ...

    def load(self, data: Any) -> A:
        """Rebuild an aggregate from its serialized value."""
        ...


@dataclass(frozen=True)
class PluginDefinition(Plugin[A], Generic[A]):
    """Plugin assembled from plain functions.

    Any hook left as None leaves the aggregate unchanged; a missing
    ``query`` exposes the raw aggregate.
    """

    init: Callable[[SSetState], A] | None = None
    add: Callable[[A, Any], A] | None = None
    remove: Callable[[A, Any], A] | None = None
    api: Callable[[SSetState, A], Any] | None = None
    to_data: Callable[[A], Any] | None = None
    from_data: Callable[[Any], A] | None = None

    def on_init(self, state: SSetState) -> A:
        if self.init is None:
            return None  # type: ignore[return-value]
        return self.init(state)

    def on_add(self, aggregate: A, value: Any) -> A:
        if self.add is None:
            return aggregate
        return self.add(aggregate, value)

    def on_remove(self, aggregate: A, value: Any) -> A:
        if self.remove is None:
            return aggregate
        return self.remove(aggregate, value)

    def query(self, state: SSetState, aggregate: A) -> Any:
        if self.api is None:
            return aggregate
        return self.api(state, aggregate)

    def dump(self, aggregate: A) -> Any:
        if self.to_data is None:
            return aggregate
        return self.to_data(aggregate)

    def load(self, data: Any) -> A:
        if self.from_data is None:
            return data
        return self.from_data(data)
