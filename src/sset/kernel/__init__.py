"""Kernel abstractions - canonical values, state and plugin protocol."""

from .canonical import Canonical, canonicalize, encode, hash_canonical, hash_of
from .config import DEFAULT_CONFIG, SSetConfig
from .errors import (
    CanonicalizationFailure,
    InvalidMergeArgument,
    PluginAlreadyActive,
    PluginNotActive,
    ReservedPluginName,
    SerializationError,
    SSetError,
    ValueAlreadyExists,
    ValueNotFound,
)
from .plugin import Plugin, PluginDefinition
from .state import SSetState

__all__ = [
    "Canonical",
    "canonicalize",
    "encode",
    "hash_canonical",
    "hash_of",
    "DEFAULT_CONFIG",
    "SSetConfig",
    "SSetError",
    "CanonicalizationFailure",
    "InvalidMergeArgument",
    "PluginAlreadyActive",
    "PluginNotActive",
    "ReservedPluginName",
    "SerializationError",
    "ValueAlreadyExists",
    "ValueNotFound",
    "Plugin",
    "PluginDefinition",
    "SSetState",
]
