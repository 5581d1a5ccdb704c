"""Error types raised by set operations.

Every error is a precondition violation raised at the offending call.
Since all transitions are copy-on-write, the receiver stays valid.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class SSetError(Exception):
    """Base class for all set errors."""


class ValueAlreadyExists(SSetError):
    """Raised by ``add`` when the value's identity key is already present."""

    def __init__(self, value: Any, key: str | None = None, message: str | None = None) -> None:
        self.value = value
        self.key = key
        super().__init__(message or f"Value {value!r} is already contained in the set")


class ValueNotFound(SSetError, LookupError):
    """Raised by ``remove``/``get_by_hash`` when the key is absent."""

    def __init__(self, message: str, value: Any = None, key: str | None = None) -> None:
        self.value = value
        self.key = key
        super().__init__(message)

    @classmethod
    def for_value(cls, value: Any, key: str) -> ValueNotFound:
        return cls(f"There is no value {value!r} in the set", value=value, key=key)

    @classmethod
    def for_key(cls, key: str) -> ValueNotFound:
        return cls(f"No item in the set corresponds to hash '{key}'", key=key)


class InvalidMergeArgument(SSetError, TypeError):
    """Raised when ``merge`` receives a set instead of a plain value."""

    def __init__(self, message: str = "Please use union for merging two sets") -> None:
        super().__init__(message)


def _describe_names(names: tuple[str, ...], singular: str, plural: str) -> str:
    noun = "Plugins" if len(names) > 1 else "Plugin"
    verb = plural if len(names) > 1 else singular
    return f"{noun} {', '.join(names)} {verb}"


class PluginAlreadyActive(SSetError):
    """Raised by ``add_plugins`` on a name collision.

    ``names`` holds every colliding name, sorted.
    """

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(_describe_names(self.names, "is already active", "are already active"))


class PluginNotActive(SSetError, LookupError):
    """Raised when querying or removing a plugin that is not registered."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(_describe_names(self.names, "is not active", "are not active"))


class ReservedPluginName(SSetError, ValueError):
    """Raised when a plugin would take a name the serialized props already use."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Reserved plugin name: {', '.join(self.names)}")


class CanonicalizationFailure(SSetError, ValueError):
    """Raised when a value cannot be reduced to the serialization-safe form.

    Preserves the offending value and its location inside the input
    (e.g. ``$.tags[2]``) for debugging.
    """

    def __init__(self, message: str, raw_value: object, path: str = "$") -> None:
        self.raw_value = raw_value
        self.path = path
        super().__init__(f"{message} at {path}")

    def __repr__(self) -> str:
        return f"CanonicalizationFailure({super().__repr__()}, path={self.path!r})"


class SerializationError(SSetError, ValueError):
    """Raised when a serialized set envelope is malformed."""

    def __init__(self, message: str, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"SerializationError({super().__repr__()}, raw_value={self.raw_value!r})"
