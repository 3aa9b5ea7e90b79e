"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pubimport.adapters.archive import write_zip_archive
from pubimport.adapters.publications import HttpPublicationFetcher
from pubimport.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyImportUnitOfWork,
    is_started,
    startup,
)
from pubimport.adapters.workbook import read_workbook
from pubimport.domain.link_import import ImportResult, run_link_import
from pubimport.domain.site_catalog import add_site, list_sites, refresh_site_counts, remove_site

if TYPE_CHECKING:
    from collections.abc import Callable

    from pubimport.domain.link_import import ProgressSink
    from pubimport.domain.model import Site
    from pubimport.domain.ports.fetching import PublicationFetcher
    from pubimport.domain.ports.unit_of_work import ImportUnitOfWork

type UnitOfWorkFactory = Callable[[], ImportUnitOfWork]


log = getLogger(__name__)


def _ensure_started(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyImportUnitOfWork


def import_workbook(
    path: Path,
    *,
    output_dir: Path | None = None,
    fetcher: PublicationFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    progress: ProgressSink | None = None,
) -> tuple[ImportResult, Path]:
    """Import all publications linked from ``path`` and write the archive to disk."""

    effective_uow = _ensure_started(unit_of_work_factory)
    effective_fetcher = fetcher or HttpPublicationFetcher()
    target_dir = output_dir or Path.cwd()

    sites = list_sites(unit_of_work_factory=effective_uow)
    log.info("Starting import of %s against %d configured sites", path, len(sites))

    result = run_link_import(
        file_name=path.name,
        content=path.read_bytes(),
        sites=sites,
        reader=read_workbook,
        fetcher=effective_fetcher,
        unit_of_work_factory=effective_uow,
        archive_writer=write_zip_archive,
        progress=progress,
    )

    target_dir.mkdir(parents=True, exist_ok=True)
    archive_path = target_dir / result.archive_file_name
    archive_path.write_bytes(result.archive)
    log.info("Wrote %s (%d bytes)", archive_path, len(result.archive))

    refresh_site_counts(result.summary, sites, unit_of_work_factory=effective_uow)
    return result, archive_path


def create_site(
    *,
    name: str,
    url: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Site:
    return add_site(name=name, url=url, unit_of_work_factory=_ensure_started(unit_of_work_factory))


def configured_sites(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> list[Site]:
    return list_sites(unit_of_work_factory=_ensure_started(unit_of_work_factory))


def delete_site(site_id: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None) -> Site:
    return remove_site(site_id, unit_of_work_factory=_ensure_started(unit_of_work_factory))
