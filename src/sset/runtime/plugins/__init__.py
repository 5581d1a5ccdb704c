from .builtin import counter_plugin, histogram_plugin, size_plugin
from .registry import (
    active_plugins,
    add_plugins,
    dump_aggregates,
    notify,
    only_use_plugins,
    query,
    remove_plugins,
    restore_plugins,
)

__all__ = [
    "active_plugins",
    "add_plugins",
    "counter_plugin",
    "dump_aggregates",
    "histogram_plugin",
    "notify",
    "only_use_plugins",
    "query",
    "remove_plugins",
    "restore_plugins",
    "size_plugin",
]
