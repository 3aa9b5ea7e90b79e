"""Pydantic models describing publication API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class PublicationBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class PublicationEnvelope(PublicationBaseModel):
    """Some sites wrap the record in a ``data`` object."""

    data: dict[str, Any]


class ErrorResponse(PublicationBaseModel):
    error: str | int | bool
    message: str | None = None


def unwrap_publication_payload(payload: object) -> dict[str, Any]:
    """Return the record object of a decoded response body.

    Raises ``ValueError`` (pydantic's ``ValidationError`` included) when the body
    is not a JSON object.
    """

    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
    record: dict[str, Any] = payload
    if isinstance(record.get("data"), dict):
        return PublicationEnvelope.model_validate(record).data
    return record
