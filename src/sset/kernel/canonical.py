"""Canonicalization and structural hashing - pure and dependency-free.

A canonical value is one of ``None``, ``bool``, ``int``, finite ``float``,
``str``, ``list`` of canonical values, or ``dict`` with ``str`` keys and
canonical values. Identity keys are digests over the compact, key-sorted
JSON encoding of that form, so they are stable across processes.
"""

from __future__ import annotations

import hashlib
import json
import math
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from .config import DEFAULT_CONFIG, SSetConfig
from .errors import CanonicalizationFailure

Canonical = None | bool | int | float | str | list["Canonical"] | dict[str, "Canonical"]


@runtime_checkable
class SupportsToJSON(Protocol):
    """Object that serializes itself to plain data, such as a nested set."""

    def to_json(self) -> Any: ...


def canonicalize(value: Any, config: SSetConfig = DEFAULT_CONFIG) -> Canonical:
    """Reduce a value to its serialization-safe form.

    Args:
        value: The value to normalize
        config: Options controlling number normalization

    Returns:
        A fresh canonical value; the input is never modified

    Raises:
        CanonicalizationFailure: If the value contains a cycle or an unsupported type
    """
    return _canonicalize(value, config, "$", set())


def _canonicalize(value: Any, config: SSetConfig, path: str, active: set[int]) -> Canonical:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return str.__str__(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationFailure(f"Non-finite number {value!r} is not supported", value, path)
        if config.normalize_integral_floats and value.is_integer():
            return int(value)
        return float(value)

    if isinstance(value, BaseModel):
        return _canonicalize(value.model_dump(mode="json"), config, path, active)
    if isinstance(value, SupportsToJSON):
        return _canonicalize(value.to_json(), config, path, active)

    if isinstance(value, (list, tuple, Mapping)):
        marker = id(value)
        if marker in active:
            raise CanonicalizationFailure("Cyclic reference detected", value, path)
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                result: dict[str, Canonical] = {}
                for key, item in value.items():
                    if not isinstance(key, str):
                        raise CanonicalizationFailure(
                            f"Mapping key {key!r} is not a string", value, path
                        )
                    result[key] = _canonicalize(item, config, f"{path}.{key}", active)
                return result
            return [
                _canonicalize(item, config, f"{path}[{index}]", active)
                for index, item in enumerate(value)
            ]
        finally:
            active.discard(marker)

    raise CanonicalizationFailure(f"Unsupported type {type(value).__name__}", value, path)


def encode(canonical: Canonical) -> bytes:
    """Compact, key-sorted UTF-8 JSON encoding of a canonical value."""
    return json.dumps(
        canonical,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def hash_canonical(canonical: Canonical, config: SSetConfig = DEFAULT_CONFIG) -> str:
    """Identity key of an already canonical value."""
    return hashlib.new(config.hash_algorithm, encode(canonical)).hexdigest()


def hash_of(value: Any, config: SSetConfig = DEFAULT_CONFIG) -> str:
    """Canonicalize a value and return its identity key."""
    return hash_canonical(canonicalize(value, config), config)
