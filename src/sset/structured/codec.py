"""Encoding and decoding set states through the serialized envelope."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from sset.kernel.canonical import canonicalize
from sset.kernel.config import DEFAULT_CONFIG, SSetConfig
from sset.kernel.errors import CanonicalizationFailure, SerializationError
from sset.kernel.plugin import Plugin
from sset.kernel.state import SSetState
from sset.runtime.plugins.registry import dump_aggregates, restore_plugins

from .schema import SerializedSSet, SSetProps

logger = logging.getLogger(__name__)


def encode_state(state: SSetState) -> SerializedSSet:
    """Build the envelope for a state.

    Members are listed in identity-key order. Plugin aggregates are dumped
    and must be serialization-safe.

    Raises:
        CanonicalizationFailure: If a plugin aggregate cannot be serialized
    """
    props: dict[str, Any] = {"size": state.size}
    for name, data in dump_aggregates(state).items():
        try:
            props[name] = canonicalize(data, state.config)
        except CanonicalizationFailure as exc:
            raise CanonicalizationFailure(
                f"Aggregate of plugin '{name}' is not serializable", exc.raw_value, exc.path
            ) from exc
    return SerializedSSet(
        props=SSetProps(**props),
        state=[value for _, value in state.items()],
    )


def parse_envelope(data: Mapping[str, Any] | str | bytes) -> SerializedSSet:
    """Validate a serialized envelope given as a mapping or JSON text.

    Raises:
        SerializationError: If the envelope does not match the wire form
    """
    try:
        if isinstance(data, (str, bytes)):
            return SerializedSSet.model_validate_json(data)
        return SerializedSSet.model_validate(data)
    except ValidationError as exc:
        raise SerializationError(f"Invalid serialized set: {exc.error_count()} error(s)", data) from exc


def decode_state(
    data: Mapping[str, Any] | str | bytes,
    plugins: Mapping[str, Plugin[Any]] | None = None,
    config: SSetConfig | None = None,
) -> SSetState:
    """Rebuild a state from its envelope.

    Identity keys are recomputed locally from each member. Aggregates of
    the supplied plugins are restored from ``props``; only supplied plugins
    are activated.

    Raises:
        SerializationError: If the envelope is malformed
        CanonicalizationFailure: If a member cannot be canonicalized
    """
    envelope = parse_envelope(data)
    state = SSetState(config=config or DEFAULT_CONFIG)
    for value in envelope.state:
        state, _, _, _ = state.merge(value)

    if state.size != envelope.props.size:
        logger.debug(
            "Serialized size %d differs from rebuilt size %d; using rebuilt size",
            envelope.props.size,
            state.size,
        )
    return restore_plugins(state, plugins or {}, envelope.props.plugin_props())
