"""Render publications as archive files."""

from __future__ import annotations

import re
from datetime import UTC
from typing import TYPE_CHECKING, Final
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from datetime import datetime

    from pubimport.domain.model import Publication

MAX_FILE_NAME_LENGTH: Final[int] = 120
UNKNOWN_SITE: Final[str] = "unknown_site"
ARCHIVE_PREFIX: Final[str] = "excel_import"

_UNSAFE_CHARACTERS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")


def sanitize_file_name(value: str) -> str:
    cleaned = _UNSAFE_CHARACTERS.sub("_", value)
    cleaned = _WHITESPACE.sub("_", cleaned)
    return cleaned[:MAX_FILE_NAME_LENGTH]


def site_identifier(site_url: str | None) -> str:
    """Hostname of ``site_url``, or ``unknown_site`` if there is none."""

    if not site_url:
        return UNKNOWN_SITE
    try:
        hostname = urlsplit(site_url).hostname
    except ValueError:
        return UNKNOWN_SITE
    return hostname or UNKNOWN_SITE


def publication_file_name(publication: Publication) -> str:
    site = sanitize_file_name(site_identifier(publication.site_url))
    return f"{site}_{sanitize_file_name(publication.id)}.txt"


def render_publication(publication: Publication) -> str:
    lines = (
        ("site_url", publication.site_url),
        ("id", publication.id),
        ("type", publication.type),
        ("jnr", publication.jnr),
        ("title", publication.title),
        ("published_date", publication.published_date),
        ("date", publication.date),
        ("is_board_ruling", publication.is_board_ruling),
        ("is_brought_to_court", publication.is_brought_to_court),
        ("authority", publication.authority),
        ("categories", publication.categories),
        ("original_url", publication.original_url),
        ("abstract", publication.abstract),
        ("body", publication.body),
    )
    return "\n".join(f"{label}: {value or ''}" for label, value in lines)


def archive_file_name(now: datetime) -> str:
    """``excel_import_<UTC timestamp>.zip`` with ``:`` and ``.`` made file-safe."""

    timestamp = now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    timestamp = timestamp.replace(":", "-").replace(".", "-")
    return f"{ARCHIVE_PREFIX}_{timestamp}.zip"
