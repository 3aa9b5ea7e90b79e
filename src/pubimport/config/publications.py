"""Remote publication API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_choice, env_float, env_int, optional_env_var
from .errors import InvalidSettingError
from .http_resilience import (
    CACHE_BACKENDS,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)

DEFAULT_PUBLICATION_ENDPOINT = "api/publications/{guid}"
DEFAULT_FETCH_CONCURRENCY = 5
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CACHE_BACKEND = "memory"


@dataclass(frozen=True, slots=True)
class PublicationApiConfig:
    """Holds settings for fetching publication records from a site."""

    endpoint: str
    concurrency: int
    resilience: ResilienceConfig

    def endpoint_for(self, guid: str) -> str:
        return self.endpoint.format(guid=guid)


def get_cache_config() -> CacheConfig | None:
    """Read ``PUBLICATION_CACHE_BACKEND``; ``off`` disables the response cache."""

    backend = env_choice("PUBLICATION_CACHE_BACKEND", CACHE_BACKENDS, DEFAULT_CACHE_BACKEND)
    if backend == "off":
        return None
    return CacheConfig(backend="sqlite" if backend == "sqlite" else "memory")


def get_publication_config(*, resilience: ResilienceConfig | None = None) -> PublicationApiConfig:
    endpoint = optional_env_var("PUBLICATION_ENDPOINT") or DEFAULT_PUBLICATION_ENDPOINT
    if "{guid}" not in endpoint:
        raise InvalidSettingError(
            "PUBLICATION_ENDPOINT", endpoint, "a path containing a {guid} placeholder"
        )

    return PublicationApiConfig(
        endpoint=endpoint.lstrip("/"),
        concurrency=env_int("PUBLICATION_CONCURRENCY", DEFAULT_FETCH_CONCURRENCY),
        resilience=resilience
        or ResilienceConfig(
            name="publications",
            timeout_seconds=env_float("PUBLICATION_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            retry=RetryPolicy(total=3),
            cache=get_cache_config(),
            default_headers={"Accept": "application/json"},
        ),
    )
