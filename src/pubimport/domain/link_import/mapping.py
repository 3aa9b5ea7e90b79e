"""Map raw remote payloads onto publications."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pubimport.domain.model import DEFAULT_PUBLICATION_TYPE, Publication

from .errors import PublicationMappingError

if TYPE_CHECKING:
    from collections.abc import Mapping


def _text(value: object) -> str:
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def publication_from_payload(payload: Mapping[str, object], site_url: str) -> Publication:
    """Build a publication from ``payload``, keeping the payload as metadata.

    The record id comes from ``id`` and falls back to ``guid``.
    """

    identifier = _text(payload.get("id")) or _text(payload.get("guid"))
    if not identifier:
        raise PublicationMappingError("Fetched entry did not contain an ID or GUID.")

    return Publication(
        id=identifier,
        site_url=site_url,
        title=_text(payload.get("title")),
        abstract=_text(payload.get("abstract")),
        body=_text(payload.get("body")),
        published_date=_text(payload.get("published_date")) or _text(payload.get("date")),
        type=_text(payload.get("type")) or DEFAULT_PUBLICATION_TYPE,
        seen=False,
        metadata=dict(payload),
    )
