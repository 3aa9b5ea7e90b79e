from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from openpyxl import Workbook

from pubimport.app import configured_sites, create_site, delete_site, import_workbook
from pubimport.domain.link_import import NoSitesConfiguredError
from tests.helpers.link_import import GUID_A, GUID_B, FakePublicationFetcher, collect_files

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from pubimport.adapters.sqlalchemy.unit_of_work import SqlAlchemyImportUnitOfWork


def _write_links(path: Path, links: list[str]) -> Path:
    workbook = Workbook()
    sheet = workbook.active
    assert sheet is not None
    sheet.append(["Link"])
    for link in links:
        sheet.append([link])
    workbook.save(path)
    return path


def test_import_writes_archive_and_refreshes_site_counts(
    tmp_path: Path,
    sqlite_unit_of_work: Callable[[], SqlAlchemyImportUnitOfWork],
) -> None:
    site_a = create_site(
        name="A", url="https://a.example", unit_of_work_factory=sqlite_unit_of_work
    )
    site_b = create_site(
        name="B", url="https://www.b.example", unit_of_work_factory=sqlite_unit_of_work
    )
    source = _write_links(
        tmp_path / "links.xlsx",
        [
            f"https://a.example/x?guid={GUID_A}",
            f"https://b.example/y/{GUID_B}",
            "https://unknown.example/z",
            f"https://a.example/x?guid={GUID_A}",
        ],
    )
    fetcher = FakePublicationFetcher(
        {
            site_a.url: [{"id": GUID_A, "title": "First"}],
            site_b.url: [{"guid": GUID_B, "title": "Second"}],
        }
    )

    result, archive_path = import_workbook(
        source,
        output_dir=tmp_path / "out",
        fetcher=fetcher,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert archive_path == tmp_path / "out" / result.archive_file_name
    assert sorted(collect_files(archive_path.read_bytes())) == [
        f"a.example_{GUID_A}.txt",
        f"www.b.example_{GUID_B}.txt",
    ]
    assert result.summary.new_entries_saved == 2
    sites = configured_sites(unit_of_work_factory=sqlite_unit_of_work)
    assert [(site.name, site.entry_count) for site in sites] == [("A", 1), ("B", 1)]
    assert all(site.last_updated is not None for site in sites)

    second, _ = import_workbook(
        source,
        output_dir=tmp_path / "out",
        fetcher=fetcher,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert second.summary.new_entries_saved == 0
    assert len(fetcher.calls) == 2
    assert collect_files(second.archive) == collect_files(result.archive)


def test_import_without_sites_fails(
    tmp_path: Path,
    sqlite_unit_of_work: Callable[[], SqlAlchemyImportUnitOfWork],
) -> None:
    source = _write_links(tmp_path / "links.xlsx", [f"https://a.example/{GUID_A}"])

    with pytest.raises(NoSitesConfiguredError):
        import_workbook(
            source,
            output_dir=tmp_path,
            fetcher=FakePublicationFetcher(),
            unit_of_work_factory=sqlite_unit_of_work,
        )

    assert not list(tmp_path.glob("*.zip"))


def test_site_management_round_trip(
    sqlite_unit_of_work: Callable[[], SqlAlchemyImportUnitOfWork],
) -> None:
    site = create_site(name="A", url="https://a.example", unit_of_work_factory=sqlite_unit_of_work)

    assert [s.id for s in configured_sites(unit_of_work_factory=sqlite_unit_of_work)] == [site.id]

    delete_site(site.id, unit_of_work_factory=sqlite_unit_of_work)

    assert configured_sites(unit_of_work_factory=sqlite_unit_of_work) == []
