"""Known remote sites publications are imported from."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import urlsplit
from uuid import uuid4

if TYPE_CHECKING:
    from datetime import datetime


def new_site_id() -> str:
    return uuid4().hex


def normalize_hostname(hostname: str) -> str:
    """Lower-case ``hostname`` and strip one leading ``www.`` label."""

    lowered = hostname.lower()
    if lowered.startswith("www."):
        return lowered[4:]
    return lowered


@dataclass(eq=False, kw_only=True)
class Site:
    """A configured publication source, matched by its normalized hostname."""

    id: str = field(default_factory=new_site_id)
    name: str
    url: str
    entry_count: int = 0
    last_updated: datetime | None = None

    @property
    def hostname(self) -> str | None:
        """Normalized hostname of ``url`` or ``None`` when the URL has no host."""

        try:
            host = urlsplit(self.url).hostname
        except ValueError:
            return None
        if not host:
            return None
        return normalize_hostname(host)
