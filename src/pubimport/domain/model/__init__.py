"""Public domain model surface."""

from __future__ import annotations

from pubimport.domain.model.publication import (
    DEFAULT_PUBLICATION_TYPE,
    Publication,
    PublicationMetadata,
    metadata_text,
)
from pubimport.domain.model.site import Site, new_site_id, normalize_hostname

__all__ = [
    "DEFAULT_PUBLICATION_TYPE",
    "Publication",
    "PublicationMetadata",
    "Site",
    "metadata_text",
    "new_site_id",
    "normalize_hostname",
]
