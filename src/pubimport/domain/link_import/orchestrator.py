"""Per-site fetch and persist pass of the link import."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from .context import SiteImportSummary
from .errors import PublicationMappingError
from .mapping import publication_from_payload
from .progress import ImportStage

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pubimport.domain.model import Publication, Site
    from pubimport.domain.ports.fetching import PublicationFetcher, RawPublication
    from pubimport.domain.ports.unit_of_work import ImportUnitOfWork

    from .context import ImportContext, SitePlan

log = getLogger(__name__)


@dataclass(slots=True)
class SiteReconciliation:
    """Bring the local store up to date with one site's planned identifiers.

    Identifiers already stored are reloaded, missing ones are fetched in one
    batch and saved. Both end up in the run's publication map.
    """

    fetcher: PublicationFetcher
    uow: ImportUnitOfWork

    def run(self, site_plan: SitePlan, *, context: ImportContext) -> SiteImportSummary:
        site = site_plan.site
        publications = self.uow.repositories.publications

        context.report(ImportStage.FETCHING, f"Checking existing entries for {site.name}...")
        stored = publications.existing_ids(site.url, site_plan.identifiers)
        existing = [identifier for identifier in site_plan.identifiers if identifier in stored]
        missing = [identifier for identifier in site_plan.identifiers if identifier not in stored]

        fetched: list[Publication] = []
        if missing:
            fetched = self._fetch_missing(site_plan, missing, context=context)
            if fetched:
                context.report(
                    ImportStage.SAVING, f"Saving {len(fetched)} entries for {site.name}..."
                )
                publications.add_batch(site.url, fetched)
                self.uow.commit()
                context.new_entries_saved += len(fetched)

        reloaded = publications.load_by_ids(site.url, existing) if existing else []
        if len(reloaded) != len(existing):
            log.warning(
                "Reloaded %d of %d existing entries for %s",
                len(reloaded),
                len(existing),
                site.name,
            )

        for publication in (*reloaded, *fetched):
            context.publications[(site.id, publication.id)] = replace(
                publication, site_url=site.url
            )

        summary = SiteImportSummary(
            site_id=site.id,
            site_name=site.name,
            total_links=site_plan.total_link_count,
            unique_entries=len(site_plan.identifiers),
            new_entries_saved=len(fetched),
            existing_entries=len(site_plan.identifiers) - len(missing),
            failed_entries=len(missing) - len(fetched),
        )
        log.info(
            "Site %s: %d links, %d unique, %d new, %d existing, %d failed",
            site.name,
            summary.total_links,
            summary.unique_entries,
            summary.new_entries_saved,
            summary.existing_entries,
            summary.failed_entries,
        )
        return summary

    def _fetch_missing(
        self,
        site_plan: SitePlan,
        missing: list[str],
        *,
        context: ImportContext,
    ) -> list[Publication]:
        site = site_plan.site
        total = len(missing)
        context.report(
            ImportStage.FETCHING,
            f"Fetching {total} new entries for {site.name}...",
            current=0,
            total=total,
        )

        def on_progress(completed: int, batch_total: int) -> None:
            context.report(
                ImportStage.FETCHING,
                f"Fetching entries for {site.name}: {completed}/{batch_total}",
                current=completed,
                total=batch_total,
            )

        result = self.fetcher.fetch_batch(site.url, missing, on_progress=on_progress)

        for identifier in result.failed:
            original_url = site_plan.url_by_identifier.get(identifier)
            if original_url is None:
                log.warning("Failed identifier %s has no originating link", identifier)
                continue
            context.add_failed_link(original_url)

        return list(_map_payloads(result.succeeded, site))


def _map_payloads(payloads: Iterable[RawPublication], site: Site) -> Iterable[Publication]:
    for payload in payloads:
        try:
            yield publication_from_payload(payload, site.url)
        except PublicationMappingError as exc:
            log.warning("Skipping entry from %s: %s", site.name, exc)


def reconcile_sites(
    site_plans: Iterable[SitePlan],
    *,
    fetcher: PublicationFetcher,
    uow: ImportUnitOfWork,
    context: ImportContext,
) -> None:
    """Run ``SiteReconciliation`` for each plan in order, one site at a time."""

    reconciliation = SiteReconciliation(fetcher=fetcher, uow=uow)
    for site_plan in site_plans:
        context.site_summaries.append(reconciliation.run(site_plan, context=context))
