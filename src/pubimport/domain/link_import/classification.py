"""Resolve the owning site and record identifier of a link."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final
from urllib.parse import SplitResult, parse_qsl, urlsplit

from pubimport.domain.model import normalize_hostname

from .context import ParsedLink

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pubimport.domain.model import Site

GUID_QUERY_PARAMETER: Final[str] = "guid"

_GUID_PATTERN: Final[str] = (
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_GUID_EXACT = re.compile(rf"^{_GUID_PATTERN}$")
_GUID_SEARCH = re.compile(_GUID_PATTERN)


def is_guid(value: str) -> bool:
    return _GUID_EXACT.fullmatch(value) is not None


def classify_link(url: str, sites: Sequence[Site]) -> ParsedLink:
    """Classify ``url`` against ``sites``. Never raises."""

    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return ParsedLink(original_url=url)

    if not parts.scheme or not hostname:
        return ParsedLink(original_url=url)

    return ParsedLink(
        original_url=url,
        site=match_site(hostname, sites),
        identifier=extract_identifier(parts),
    )


def match_site(hostname: str, sites: Sequence[Site]) -> Site | None:
    """Return the first site whose normalized hostname equals ``hostname``'s."""

    normalized = normalize_hostname(hostname)
    for site in sites:
        site_host = site.hostname
        if site_host is not None and site_host == normalized:
            return site
    return None


def extract_identifier(parts: SplitResult) -> str | None:
    """Return the record GUID carried by a URL.

    The ``guid`` query parameter wins. Otherwise path segments are scanned from
    the last one backwards: an exact GUID segment is taken as is, else the first
    segment embedding a GUID yields the embedded part.
    """

    for name, value in parse_qsl(parts.query, keep_blank_values=True):
        if name == GUID_QUERY_PARAMETER:
            if value.strip():
                return value.strip()
            break

    segments = [segment for segment in parts.path.split("/") if segment]
    for segment in reversed(segments):
        cleaned = segment.strip()
        if not cleaned:
            continue
        if is_guid(cleaned):
            return cleaned
        match = _GUID_SEARCH.search(cleaned)
        if match is not None:
            return match.group(0)

    return None
