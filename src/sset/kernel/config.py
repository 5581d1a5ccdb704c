"""Configuration for canonicalization and hashing."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass


@dataclass(frozen=True)
class SSetConfig:
    """Hashing options carried by every set state.

    Attributes:
        hash_algorithm: Any ``hashlib`` algorithm name used for identity keys
        normalize_integral_floats: Treat ``1.0`` and ``1`` as the same member
    """

    hash_algorithm: str = "sha256"
    normalize_integral_floats: bool = True

    def __post_init__(self) -> None:
        if self.hash_algorithm not in hashlib.algorithms_available:
            raise ValueError(f"Unknown hash algorithm: {self.hash_algorithm}")
        if self.hash_algorithm.startswith("shake_"):
            raise ValueError("Variable-length digests are not supported")


DEFAULT_CONFIG = SSetConfig()
