"""Reusable fakes and builders for link import tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO
from typing import TYPE_CHECKING, Literal
from zipfile import ZipFile

from pubimport.domain.model import Publication, Site
from pubimport.domain.ports.fetching import BatchFetchResult
from pubimport.domain.ports.unit_of_work import ImportRepositories
from pubimport.domain.ports.workbook import CellValue

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence
    from types import TracebackType

    from pubimport.domain.ports.fetching import FetchProgressCallback, RawPublication

GUID_A = "11111111-1111-1111-1111-111111111111"
GUID_B = "22222222-2222-2222-2222-222222222222"
GUID_C = "33333333-3333-3333-3333-333333333333"


def make_site(name: str = "A", host: str = "a.example", *, site_id: str | None = None) -> Site:
    return Site(id=site_id or f"site-{name.lower()}", name=name, url=f"https://{host}")


def make_payload(identifier: str, **fields: object) -> dict[str, object]:
    payload: dict[str, object] = {"id": identifier, "title": f"Title {identifier[:8]}"}
    payload.update(fields)
    return payload


def make_publication(identifier: str, site: Site, **fields: object) -> Publication:
    return Publication(
        id=identifier,
        site_url=site.url,
        title=str(fields.pop("title", f"Stored {identifier[:8]}")),
        metadata=dict(fields),
    )


class FakePublicationFetcher:
    """Serves payloads from a per-site table; unknown identifiers fail."""

    def __init__(self, payloads: Mapping[str, Iterable[RawPublication]] | None = None) -> None:
        self._payloads: dict[tuple[str, str], RawPublication] = {}
        for site_url, items in (payloads or {}).items():
            for item in items:
                key = str(item.get("id") or item.get("guid"))
                self._payloads[(site_url, key)] = item
        self.calls: list[tuple[str, list[str]]] = []

    def add(self, site_url: str, identifier: str, payload: RawPublication) -> None:
        self._payloads[(site_url, identifier)] = payload

    def fetch_batch(
        self,
        site_url: str,
        identifiers: Sequence[str],
        *,
        on_progress: FetchProgressCallback | None = None,
    ) -> BatchFetchResult:
        requested = list(identifiers)
        self.calls.append((site_url, requested))
        result = BatchFetchResult()
        for index, identifier in enumerate(requested, start=1):
            payload = self._payloads.get((site_url, identifier))
            if payload is None:
                result.failed.append(identifier)
            else:
                result.succeeded.append(dict(payload))
            if on_progress is not None:
                on_progress(index, len(requested))
        return result


@dataclass
class FakeSheet:
    """Rectangular in-memory sheet; ``rows`` hold plain text or ``CellValue``s."""

    rows: list[list[str | CellValue | None]]
    name: str = "Sheet1"
    min_row: int = 1
    min_column: int = 1

    @property
    def max_row(self) -> int:
        return self.min_row + max(len(self.rows), 1) - 1

    @property
    def max_column(self) -> int:
        width = max((len(row) for row in self.rows), default=1)
        return self.min_column + max(width, 1) - 1

    def cell(self, row: int, column: int) -> CellValue | None:
        row_index = row - self.min_row
        column_index = column - self.min_column
        if row_index >= len(self.rows) or column_index >= len(self.rows[row_index]):
            return None
        value = self.rows[row_index][column_index]
        if value is None or isinstance(value, CellValue):
            return value
        return CellValue(text=value)


@dataclass
class FakeWorkbook:
    sheets: list[FakeSheet] = field(default_factory=list[FakeSheet])


def workbook_reader(workbook: FakeWorkbook) -> Callable[[bytes], FakeWorkbook]:
    def read(content: bytes) -> FakeWorkbook:
        _ = content
        return workbook

    return read


def links_workbook(links: Iterable[str]) -> FakeWorkbook:
    rows: list[list[str | CellValue | None]] = [["Link"]]
    rows.extend([link] for link in links)
    return FakeWorkbook(sheets=[FakeSheet(rows=rows)])


class FakePublicationRepository:
    """In-memory publication store keyed by ``(site_url, id)``."""

    def __init__(self, initial: Iterable[Publication] | None = None) -> None:
        self.items: dict[tuple[str, str], Publication] = {}
        for item in initial or []:
            self.add(item)
        self.count_error: Exception | None = None

    def add(self, entity: Publication) -> None:
        self.items[(entity.site_url, entity.id)] = entity

    def add_batch(self, site_url: str, publications: Sequence[Publication]) -> None:
        for publication in publications:
            self.items[(site_url, publication.id)] = publication

    def existing_ids(self, site_url: str, identifiers: Iterable[str]) -> set[str]:
        return {identifier for identifier in identifiers if (site_url, identifier) in self.items}

    def load_by_ids(self, site_url: str, identifiers: Iterable[str]) -> list[Publication]:
        return [
            self.items[(site_url, identifier)]
            for identifier in identifiers
            if (site_url, identifier) in self.items
        ]

    def count(self, site_url: str) -> int:
        if self.count_error is not None:
            raise self.count_error
        return sum(1 for stored_site, _ in self.items if stored_site == site_url)


class FakeSiteRepository:
    def __init__(self, initial: Iterable[Site] | None = None) -> None:
        self.items: list[Site] = list(initial or [])
        self.save_error: Exception | None = None

    def add(self, entity: Site) -> None:
        self.items.append(entity)

    def get(self, site_id: str) -> Site | None:
        return next((site for site in self.items if site.id == site_id), None)

    def list_all(self) -> list[Site]:
        return list(self.items)

    def remove(self, site: Site) -> None:
        self.items = [item for item in self.items if item.id != site.id]

    def save_all(self, sites: Sequence[Site]) -> None:
        if self.save_error is not None:
            raise self.save_error
        by_id = {site.id: site for site in sites}
        self.items = [by_id.get(item.id, item) for item in self.items]


class FakeImportUnitOfWork:
    """Unit of work sharing its repositories across every ``with`` block."""

    def __init__(
        self,
        *,
        publications: FakePublicationRepository | None = None,
        sites: FakeSiteRepository | None = None,
    ) -> None:
        self._repositories = ImportRepositories(
            publications=publications or FakePublicationRepository(),
            sites=sites or FakeSiteRepository(),
        )
        self.commits = 0
        self.rollbacks = 0

    @property
    def repositories(self) -> ImportRepositories:
        return self._repositories

    @property
    def publications(self) -> FakePublicationRepository:
        repo = self._repositories.publications
        assert isinstance(repo, FakePublicationRepository)
        return repo

    @property
    def sites(self) -> FakeSiteRepository:
        repo = self._repositories.sites
        assert isinstance(repo, FakeSiteRepository)
        return repo

    def __enter__(self) -> FakeImportUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


def collect_files(archive: bytes) -> dict[str, str]:
    with ZipFile(BytesIO(archive)) as zf:
        return {name: zf.read(name).decode("utf-8") for name in zf.namelist()}


if TYPE_CHECKING:
    from pubimport.domain.ports.fetching import PublicationFetcher
    from pubimport.domain.ports.persistence import PublicationRepository, SiteRepository
    from pubimport.domain.ports.unit_of_work import ImportUnitOfWork

    _fetcher_check: PublicationFetcher = FakePublicationFetcher()
    _publication_repo_check: PublicationRepository = FakePublicationRepository()
    _site_repo_check: SiteRepository = FakeSiteRepository()
    _uow_check: ImportUnitOfWork = FakeImportUnitOfWork()
