"""HTTP client fetching publication records from configured sites."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urljoin

import httpx

from pubimport.adapters.http_resilience import ResilienceConfig, ResilientClient
from pubimport.config.publications import PublicationApiConfig, get_publication_config
from pubimport.domain.ports.fetching import BatchFetchResult, PublicationFetcher

from .schema import ErrorResponse, unwrap_publication_payload

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pubimport.domain.ports.fetching import FetchProgressCallback, RawPublication

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class PublicationAPIError(RuntimeError):
    """Raised when a site answers with an application-level error payload."""

    def __init__(self, message: str, *, code: object = None) -> None:
        super().__init__(message)
        self.code = code


@dataclass(slots=True)
class HttpPublicationFetcher:
    """Fetch publications one request per identifier, several in flight at once."""

    config: PublicationApiConfig = field(default_factory=get_publication_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def fetch_batch(
        self,
        site_url: str,
        identifiers: Sequence[str],
        *,
        on_progress: FetchProgressCallback | None = None,
    ) -> BatchFetchResult:
        return asyncio.run(self._fetch_batch_async(site_url, list(identifiers), on_progress))

    def publication_url(self, site_url: str, identifier: str) -> str:
        base = site_url if site_url.endswith("/") else f"{site_url}/"
        return urljoin(base, self.config.endpoint_for(quote(identifier, safe="")))

    async def _fetch_batch_async(
        self,
        site_url: str,
        identifiers: list[str],
        on_progress: FetchProgressCallback | None,
    ) -> BatchFetchResult:
        result = BatchFetchResult()
        if not identifiers:
            return result

        total = len(identifiers)
        completed = 0
        payloads: dict[str, RawPublication] = {}
        semaphore = asyncio.Semaphore(self.config.concurrency)

        async with self.client_factory(self.config.resilience) as client:

            async def fetch_one(identifier: str) -> None:
                nonlocal completed
                async with semaphore:
                    try:
                        payloads[identifier] = await self._fetch_one(client, site_url, identifier)
                    except (httpx.HTTPError, PublicationAPIError, ValueError) as exc:
                        log.warning("Failed to fetch %s from %s: %s", identifier, site_url, exc)
                completed += 1
                if on_progress is not None:
                    on_progress(completed, total)

            await asyncio.gather(*(fetch_one(identifier) for identifier in identifiers))

        for identifier in identifiers:
            payload = payloads.get(identifier)
            if payload is None:
                result.failed.append(identifier)
            else:
                result.succeeded.append(payload)

        log.info(
            "Fetched %d of %d publications from %s", len(result.succeeded), total, site_url
        )
        return result

    async def _fetch_one(
        self,
        client: ResilientClient,
        site_url: str,
        identifier: str,
    ) -> dict[str, Any]:
        response = await client.get(self.publication_url(site_url, identifier))
        response.raise_for_status()

        payload = response.json()
        if isinstance(payload, dict) and "error" in payload and not _has_identity(payload):
            error_payload = ErrorResponse.model_validate(payload)
            raise PublicationAPIError(
                error_payload.message or f"API error {error_payload.error}",
                code=error_payload.error,
            )

        return unwrap_publication_payload(payload)


def _has_identity(payload: dict[str, Any]) -> bool:
    return bool(payload.get("id") or payload.get("guid") or payload.get("data"))


if TYPE_CHECKING:
    _fetcher_check: PublicationFetcher = HttpPublicationFetcher()
