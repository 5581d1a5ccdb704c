"""Plugin lifecycle management.

Plugins live inside the set state: a name-keyed registry of definitions
and a name-keyed map of aggregates. Every function here takes a state and
returns a new one; nothing is mutated in place.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from sset.kernel.errors import PluginAlreadyActive, PluginNotActive, ReservedPluginName
from sset.kernel.plugin import Plugin
from sset.kernel.state import SSetState

logger = logging.getLogger(__name__)

Event = Literal["add", "remove"]

# Serialized props already use this key for the member count
RESERVED_NAMES = frozenset({"size"})


def _check_reserved(names: Iterable[str]) -> None:
    reserved = [name for name in names if name in RESERVED_NAMES]
    if reserved:
        raise ReservedPluginName(reserved)


def active_plugins(state: SSetState) -> list[str]:
    """Names of active plugins, sorted."""
    return sorted(state.plugins)


def add_plugins(state: SSetState, definitions: Mapping[str, Plugin[Any]]) -> SSetState:
    """Register new plugins and initialize their aggregates.

    Raises:
        PluginAlreadyActive: If any name is already registered; lists all collisions
    """
    _check_reserved(definitions)
    collisions = [name for name in definitions if name in state.plugins]
    if collisions:
        raise PluginAlreadyActive(collisions)
    if not definitions:
        return state

    plugins = state.plugins.update(definitions)
    # on_init sees the registry including the plugins being added
    staged = state.with_plugins(plugins, state.aggregates)
    aggregates = state.aggregates.evolver()
    for name, plugin in definitions.items():
        aggregates[name] = plugin.on_init(staged)
    logger.debug("Activated plugins: %s", ", ".join(definitions))
    return staged.with_plugins(plugins, aggregates.persistent())


def remove_plugins(state: SSetState, names: Iterable[str]) -> SSetState:
    """Deactivate plugins and discard their aggregates.

    An empty selection returns the state unchanged.

    Raises:
        PluginNotActive: If any name is not registered; lists all unknown names
    """
    names = list(dict.fromkeys(names))
    if not names:
        return state
    missing = [name for name in names if name not in state.plugins]
    if missing:
        raise PluginNotActive(missing)

    plugins = state.plugins.evolver()
    aggregates = state.aggregates.evolver()
    for name in names:
        del plugins[name]
        if name in state.aggregates:
            del aggregates[name]
    logger.debug("Deactivated plugins: %s", ", ".join(names))
    return state.with_plugins(plugins.persistent(), aggregates.persistent())


def only_use_plugins(state: SSetState, definitions: Mapping[str, Plugin[Any]]) -> SSetState:
    """Make ``definitions`` the exact set of active plugins.

    Plugins already active under a given name keep their definition and
    aggregate; unnamed plugins are removed; new names are initialized.
    An empty selection returns the state unchanged.
    """
    if not definitions:
        return state
    stale = [name for name in state.plugins if name not in definitions]
    fresh = {name: plugin for name, plugin in definitions.items() if name not in state.plugins}
    return add_plugins(remove_plugins(state, stale), fresh)


def notify(state: SSetState, event: Event, value: Any) -> SSetState:
    """Fold a membership event into every active plugin's aggregate."""
    if not state.plugins:
        return state
    aggregates = state.aggregates.evolver()
    for name, plugin in state.plugins.items():
        current = state.aggregates.get(name)
        if event == "add":
            aggregates[name] = plugin.on_add(current, value)
        else:
            aggregates[name] = plugin.on_remove(current, value)
    return state.with_plugins(state.plugins, aggregates.persistent())


def query(state: SSetState, name: str) -> Any:
    """Return the API a plugin exposes for the current state.

    Raises:
        PluginNotActive: If ``name`` is not registered
    """
    plugin = state.plugins.get(name)
    if plugin is None:
        raise PluginNotActive([name])
    return plugin.query(state, state.aggregates.get(name))


def restore_plugins(
    state: SSetState,
    definitions: Mapping[str, Plugin[Any]],
    props: Mapping[str, Any],
) -> SSetState:
    """Attach plugins to a rebuilt state, reusing serialized aggregates.

    Plugins whose aggregate is missing from ``props`` are initialized from
    the rebuilt state instead.
    """
    if not definitions:
        return state
    _check_reserved(definitions)
    plugins = state.plugins.update(definitions)
    staged = state.with_plugins(plugins, state.aggregates)
    aggregates = state.aggregates.evolver()
    for name, plugin in definitions.items():
        if name in props:
            aggregates[name] = plugin.load(props[name])
        else:
            logger.debug("No serialized aggregate for plugin %s, initializing", name)
            aggregates[name] = plugin.on_init(staged)
    return staged.with_plugins(plugins, aggregates.persistent())


def dump_aggregates(state: SSetState) -> dict[str, Any]:
    """Serialized aggregates of every active plugin, keyed by name."""
    return {name: plugin.dump(state.aggregates.get(name)) for name, plugin in state.plugins.items()}

