"""Entry point for running a full link import."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from .assembly import assemble_publications, build_archive
from .context import ImportContext, ImportResult, ImportSummary
from .errors import NoFileProvidedError, NoSitesConfiguredError
from .extraction import extract_links
from .orchestrator import reconcile_sites
from .planning import plan_links
from .progress import ImportStage
from .rendering import archive_file_name

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pubimport.domain.model import Site
    from pubimport.domain.ports.archive import ArchiveWriter
    from pubimport.domain.ports.fetching import PublicationFetcher
    from pubimport.domain.ports.unit_of_work import ImportUnitOfWork
    from pubimport.domain.ports.workbook import WorkbookReader

    from .progress import ProgressSink

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def run_link_import(  # noqa: PLR0913
    *,
    file_name: str,
    content: bytes,
    sites: Sequence[Site],
    reader: WorkbookReader,
    fetcher: PublicationFetcher,
    unit_of_work_factory: Callable[[], ImportUnitOfWork],
    archive_writer: ArchiveWriter,
    progress: ProgressSink | None = None,
    clock: Callable[[], datetime] = _utcnow,
) -> ImportResult:
    """Import every publication linked from a workbook and bundle them.

    Stages run strictly one after another: extract links, plan, reconcile each
    site against the store and the remote source, then assemble the archive in
    input order. Per-link failures end up in the summary; only conditions that
    leave nothing to bundle raise.
    """

    if not content:
        raise NoFileProvidedError
    if not sites:
        raise NoSitesConfiguredError

    context = ImportContext(progress=progress)

    context.report(ImportStage.PARSING, f"Reading {file_name}...")
    raw_links = extract_links(reader(content))

    context.report(ImportStage.MATCHING, f"Processing {len(raw_links)} links from workbook...")
    plan = plan_links(raw_links, sites)
    for url in plan.unmatched_links:
        context.add_failed_link(url)

    with unit_of_work_factory() as uow:
        reconcile_sites(plan.site_plans, fetcher=fetcher, uow=uow, context=context)

    publications = assemble_publications(plan.unique_links, context=context)

    context.report(ImportStage.ZIPPING, "Generating ZIP file...")
    archive = build_archive(publications, archive_writer)
    archive_name = archive_file_name(clock())

    context.report(ImportStage.COMPLETE, "Excel import completed")

    summary = ImportSummary(
        total_links=len(raw_links),
        valid_links=plan.valid_link_count,
        processed_entries=len(publications),
        new_entries_saved=context.new_entries_saved,
        failed_links=context.failed_links,
        unmatched_links=tuple(plan.unmatched_links),
        site_summaries=tuple(context.site_summaries),
    )
    log.info(
        "Import of %s finished: %d links, %d valid, %d bundled, %d new, %d failed",
        file_name,
        summary.total_links,
        summary.valid_links,
        summary.processed_entries,
        summary.new_entries_saved,
        len(summary.failed_links),
    )
    return ImportResult(archive=archive, archive_file_name=archive_name, summary=summary)
