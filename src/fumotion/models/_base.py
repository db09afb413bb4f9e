"""Base model and enum for Fumotion API payloads.

Every response model inherits from :class:`FumotionBaseModel` which
provides:

* ``extra="ignore"`` so new server fields never break parsing.
* A ``model_validator(mode="before")`` that drops ``null`` values so the
  field default is used instead.
* A ``raw`` dict that captures the original payload.

Status enums inherit from :class:`FumotionEnum` which adds an ``UNKNOWN``
member and a ``_missing_`` hook that returns it for any value the client
does not know about yet.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FumotionEnum(enum.StrEnum):
    """Base for server-side status enums.

    Every subclass **must** define ``UNKNOWN = "unknown"``.
    """

    @classmethod
    def _missing_(cls, value: object) -> FumotionEnum:
        if isinstance(value, str):
            # Status strings are lower-case on the wire, tolerate the rest.
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        unknown: FumotionEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class FumotionBaseModel(BaseModel):
    """Base for Fumotion API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original API payload."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Drop ``null`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep an explicit raw= (e.g. when re-validating a dumped model).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
