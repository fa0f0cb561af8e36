"""Base model and enum for vehicle state and request models.

Every state model inherits from :class:`BridgeBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase keys (as produced by a
  protobuf-to-dict conversion in a backend) map to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used, mirroring protobuf getter semantics where an
  unset field reads as its zero value.
* A ``raw`` dict that captures the original payload.

State enums inherit from :class:`StateEnum` which resolves any value
without a mapped member to ``UNKNOWN``.
"""

from __future__ import annotations

import enum
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class StateEnum(enum.StrEnum):
    """Base for vehicle state enums.

    Every subclass **must** define ``UNKNOWN = "unknown"``. Lookups are
    tolerant: ``"NoPower"``, ``"noPower"`` and ``"NO_POWER"`` all resolve
    to the ``no_power`` member, and unmapped values resolve to ``UNKNOWN``.
    """

    @classmethod
    def _missing_(cls, value: object) -> StateEnum:
        if isinstance(value, str):
            text = value.strip()
            if not text.isupper() and "_" not in text:
                text = _CAMEL_BOUNDARY.sub("_", text)
            normalized = text.lower()
            for member in cls:
                if member.value == normalized:
                    return member
        unknown: StateEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class BridgeBaseModel(BaseModel):
    """Base for vehicle state models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_unset_values(cls, values: Any) -> Any:
        """Drop ``None`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep an explicit raw= from keyword construction.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
