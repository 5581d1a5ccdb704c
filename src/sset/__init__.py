from .collection import Collection
from .diff import SSetChanges, SSetDiff
from .graph import Graph, GraphObject
from .kernel import (
    DEFAULT_CONFIG,
    CanonicalizationFailure,
    InvalidMergeArgument,
    Plugin,
    PluginAlreadyActive,
    PluginDefinition,
    PluginNotActive,
    ReservedPluginName,
    SerializationError,
    SSetConfig,
    SSetError,
    SSetState,
    ValueAlreadyExists,
    ValueNotFound,
    canonicalize,
    hash_of,
)
from .runtime.plugins import counter_plugin, histogram_plugin, size_plugin
from .sset import MergeResult, SSet

__all__ = [
    # Core
    "SSet",
    "SSetState",
    "MergeResult",
    "canonicalize",
    "hash_of",
    # Diff
    "SSetChanges",
    "SSetDiff",
    # Configuration
    "SSetConfig",
    "DEFAULT_CONFIG",
    # Plugins
    "Plugin",
    "PluginDefinition",
    "counter_plugin",
    "histogram_plugin",
    "size_plugin",
    # Errors
    "SSetError",
    "CanonicalizationFailure",
    "InvalidMergeArgument",
    "PluginAlreadyActive",
    "PluginNotActive",
    "ReservedPluginName",
    "SerializationError",
    "ValueAlreadyExists",
    "ValueNotFound",
    # Collaborators
    "Collection",
    "Graph",
    "GraphObject",
]
