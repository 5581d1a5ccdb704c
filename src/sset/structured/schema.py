"""Pydantic models for the serialized set envelope.

Wire form::

    {"props": {"size": 3, "<plugin>": <aggregate>}, "state": [<value>, ...]}

``state`` is written in identity-key order but must be read as unordered.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SSetProps(BaseModel):
    """Set properties: the member count plus one entry per plugin."""

    model_config = ConfigDict(extra="allow")

    size: int = Field(ge=0)

    def plugin_props(self) -> dict[str, Any]:
        """Serialized aggregates keyed by plugin name."""
        return dict(self.model_extra or {})


class SerializedSSet(BaseModel):
    """Envelope transmitted between processes."""

    props: SSetProps
    state: list[Any] = Field(default_factory=list)
