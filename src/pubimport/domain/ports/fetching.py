"""Ports for fetching publication records from remote sites."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

type RawPublication = dict[str, object]
type FetchProgressCallback = Callable[[int, int], None]


@dataclass(slots=True)
class BatchFetchResult:
    """Partition of a batch request into raw payloads and failed identifiers."""

    succeeded: list[RawPublication] = field(default_factory=list["RawPublication"])
    failed: list[str] = field(default_factory=list[str])


@runtime_checkable
class PublicationFetcher(Protocol):
    """Port for retrieving a batch of publications from one site.

    ``on_progress`` is called with ``(completed, total)`` after each identifier
    finishes, successfully or not; ``total`` equals ``len(identifiers)``.
    """

    def fetch_batch(
        self,
        site_url: str,
        identifiers: Sequence[str],
        *,
        on_progress: FetchProgressCallback | None = None,
    ) -> BatchFetchResult: ...


__all__ = ["BatchFetchResult", "FetchProgressCallback", "PublicationFetcher", "RawPublication"]
