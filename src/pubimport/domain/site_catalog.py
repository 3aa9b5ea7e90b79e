"""Application services for managing the configured sites."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from pubimport.domain.link_import.extraction import is_absolute_url
from pubimport.domain.model import Site

if TYPE_CHECKING:
    from collections.abc import Callable

    from pubimport.domain.link_import.context import ImportSummary
    from pubimport.domain.ports.unit_of_work import ImportUnitOfWork

log = getLogger(__name__)


class SiteNotFoundError(LookupError):
    """Raised when a site id does not exist in the store."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


def add_site(
    *,
    name: str,
    url: str,
    unit_of_work_factory: Callable[[], ImportUnitOfWork],
) -> Site:
    """Validate and persist a new site."""

    cleaned_name = name.strip()
    cleaned_url = url.strip()
    if not cleaned_name:
        raise ValueError("Site name must not be blank")
    site = Site(name=cleaned_name, url=cleaned_url)
    # links are matched by host
    if not is_absolute_url(cleaned_url) or site.hostname is None:
        raise ValueError(f"Site URL must be an absolute URL with a host: {url}")

    with unit_of_work_factory() as uow:
        uow.repositories.sites.add(site)
        uow.commit()
    log.info("Added site %s (%s)", site.name, site.url)
    return site


def list_sites(*, unit_of_work_factory: Callable[[], ImportUnitOfWork]) -> list[Site]:
    with unit_of_work_factory() as uow:
        return uow.repositories.sites.list_all()


def remove_site(site_id: str, *, unit_of_work_factory: Callable[[], ImportUnitOfWork]) -> Site:
    with unit_of_work_factory() as uow:
        site = uow.repositories.sites.get(site_id)
        if site is None:
            raise SiteNotFoundError(f"Unknown site id: {site_id}")
        uow.repositories.sites.remove(site)
        uow.commit()
    log.info("Removed site %s", site.name)
    return site


def refresh_site_counts(
    summary: ImportSummary,
    sites: list[Site],
    *,
    unit_of_work_factory: Callable[[], ImportUnitOfWork],
    clock: Callable[[], datetime] = _utcnow,
) -> list[Site]:
    """Recount stored entries for every site touched by an import.

    Failures are logged and leave the affected site unchanged; the returned
    list always has one entry per input site, in input order.
    """

    processed = {site_summary.site_id for site_summary in summary.site_summaries}
    if not processed:
        return list(sites)

    updated: list[Site] = []
    with unit_of_work_factory() as uow:
        for site in sites:
            if site.id not in processed:
                updated.append(site)
                continue
            try:
                count = uow.repositories.publications.count(site.url)
            except Exception:  # noqa: BLE001
                log.warning("Failed to refresh entry count for %s", site.name, exc_info=True)
                updated.append(site)
                continue
            updated.append(replace(site, entry_count=count, last_updated=clock()))

        try:
            uow.repositories.sites.save_all(updated)
            uow.commit()
        except Exception:  # noqa: BLE001
            uow.rollback()
            log.warning("Unable to persist site updates after import", exc_info=True)

    return updated
