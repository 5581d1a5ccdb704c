"""Ready-made plugins."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pyrsistent import PMap, pmap

from sset.kernel.plugin import PluginDefinition
from sset.kernel.state import SSetState


def counter_plugin() -> PluginDefinition[int]:
    """Count insertions since activation. Removals are not subtracted."""
    return PluginDefinition(
        init=lambda _state: 0,
        add=lambda count, _value: count + 1,
    )


def size_plugin() -> PluginDefinition[int]:
    """Track the member count through add/remove events."""
    return PluginDefinition(
        init=lambda state: state.size,
        add=lambda count, _value: count + 1,
        remove=lambda count, _value: count - 1,
    )


def histogram_plugin(key_fn: Callable[[Any], str]) -> PluginDefinition[PMap]:
    """Count members per derived key.

    Args:
        key_fn: Maps a member to its bucket name

    The query API is a plain ``dict`` of bucket -> count.
    """

    def init(state: SSetState) -> PMap:
        counts: PMap = pmap()
        for _, value in state.items():
            counts = bump(counts, value)
        return counts

    def bump(counts: PMap, value: Any) -> PMap:
        bucket = key_fn(value)
        return counts.set(bucket, counts.get(bucket, 0) + 1)

    def drop(counts: PMap, value: Any) -> PMap:
        bucket = key_fn(value)
        remaining = counts.get(bucket, 0) - 1
        if remaining <= 0:
            return counts.discard(bucket)
        return counts.set(bucket, remaining)

    return PluginDefinition(
        init=init,
        add=bump,
        remove=drop,
        api=lambda _state, counts: dict(counts),
        to_data=dict,
        from_data=pmap,
    )
