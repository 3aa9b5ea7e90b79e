"""Ports for persisting publications and sites."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from pubimport.domain.model import Publication, Site


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class PublicationRepository(Repository["Publication"], Protocol):
    """Persistence contract for publications, partitioned by site URL."""

    def existing_ids(self, site_url: str, identifiers: Iterable[str]) -> set[str]: ...

    def load_by_ids(self, site_url: str, identifiers: Iterable[str]) -> list[Publication]: ...

    def add_batch(self, site_url: str, publications: Sequence[Publication]) -> None: ...

    def count(self, site_url: str) -> int: ...


@runtime_checkable
class SiteRepository(Repository["Site"], Protocol):
    """Persistence contract for configured sites."""

    def get(self, site_id: str) -> Site | None: ...

    def list_all(self) -> list[Site]: ...

    def remove(self, site: Site) -> None: ...

    def save_all(self, sites: Sequence[Site]) -> None: ...
