"""Shared helpers for Fumotion endpoint modules.

This module centralizes the most repeated patterns:
- unwrapping a named field of the success envelope
- validating it into a typed model (or a list of them)

It is internal to fumotion and may change at any time.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from fumotion.exceptions import FumotionApiError
from fumotion.gateway import ResponseEnvelope

M = TypeVar("M", bound=BaseModel)


def _invalid(envelope_field: str, endpoint: str, payload: Any, exc: Exception) -> FumotionApiError:
    return FumotionApiError(
        f"{endpoint} returned an unexpected '{envelope_field}' payload: {exc}",
        data=payload,
        endpoint=endpoint,
    )


def parse_model(envelope: ResponseEnvelope, field: str, model: type[M], *, endpoint: str) -> M:
    """Validate ``envelope.payload[field]`` into *model*."""
    value = envelope.get(field)
    if not isinstance(value, dict):
        raise _invalid(field, endpoint, envelope.payload, ValueError("missing or not an object"))
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        raise _invalid(field, endpoint, envelope.payload, exc) from exc


def parse_list(envelope: ResponseEnvelope, field: str, model: type[M], *, endpoint: str) -> list[M]:
    """Validate ``envelope.payload[field]`` into a list of *model*.

    A missing field is an empty list.
    """
    items = envelope.get(field, [])
    if not isinstance(items, list):
        raise _invalid(field, endpoint, envelope.payload, ValueError("not a list"))
    try:
        return [model.model_validate(item) for item in items]
    except ValidationError as exc:
        raise _invalid(field, endpoint, envelope.payload, exc) from exc


def parse_fields(envelope: ResponseEnvelope, model: type[M], values: dict[str, Any], *, endpoint: str) -> M:
    """Validate values assembled from several envelope fields into *model*."""
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise _invalid(", ".join(values), endpoint, envelope.payload, exc) from exc
