"""Public interface for the publication API adapter."""

from __future__ import annotations

from .client import HttpPublicationFetcher, PublicationAPIError
from .schema import ErrorResponse, PublicationEnvelope, unwrap_publication_payload

__all__ = [
    "ErrorResponse",
    "HttpPublicationFetcher",
    "PublicationAPIError",
    "PublicationEnvelope",
    "unwrap_publication_payload",
]
