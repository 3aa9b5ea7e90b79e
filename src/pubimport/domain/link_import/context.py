"""Run-scoped data structures shared by the link import stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .progress import ImportProgress, ImportStage

if TYPE_CHECKING:
    from pubimport.domain.model import Publication, Site

    from .progress import ProgressSink

log = getLogger(__name__)

type RecordKey = tuple[str, str]


@dataclass(frozen=True, slots=True)
class ParsedLink:
    """Classification result for one raw link.

    A link is usable only when both ``site`` and ``identifier`` are known.
    """

    original_url: str
    site: Site | None = None
    identifier: str | None = None

    @property
    def is_matched(self) -> bool:
        return self.site is not None and bool(self.identifier)

    @property
    def key(self) -> RecordKey | None:
        if self.site is None or not self.identifier:
            return None
        return (self.site.id, self.identifier)


@dataclass(slots=True)
class SitePlan:
    """Work plan for one matched site."""

    site: Site
    identifiers: list[str] = field(default_factory=list[str])
    url_by_identifier: dict[str, str] = field(default_factory=dict[str, str])
    total_link_count: int = 0

    def record(self, identifier: str, original_url: str) -> None:
        self.total_link_count += 1
        if identifier in self.url_by_identifier:
            return
        self.identifiers.append(identifier)
        self.url_by_identifier[identifier] = original_url


@dataclass(slots=True)
class LinkPlan:
    """Output of planning: ordered unique links and per-site work."""

    unique_links: list[ParsedLink] = field(default_factory=list[ParsedLink])
    unmatched_links: list[str] = field(default_factory=list[str])
    site_plans: list[SitePlan] = field(default_factory=list[SitePlan])
    valid_link_count: int = 0


@dataclass(frozen=True, slots=True)
class SiteImportSummary:
    site_id: str
    site_name: str
    total_links: int
    unique_entries: int
    new_entries_saved: int
    existing_entries: int
    failed_entries: int


@dataclass(frozen=True, slots=True)
class ImportSummary:
    total_links: int
    valid_links: int
    processed_entries: int
    new_entries_saved: int
    failed_links: tuple[str, ...]
    unmatched_links: tuple[str, ...]
    site_summaries: tuple[SiteImportSummary, ...]


@dataclass(frozen=True, slots=True)
class ImportResult:
    archive: bytes
    archive_file_name: str
    summary: ImportSummary


@dataclass(slots=True)
class ImportContext:
    """Mutable state owned by exactly one import run.

    Collections keep first-insertion order explicitly so reports are stable.
    """

    progress: ProgressSink | None = None
    publications: dict[RecordKey, Publication] = field(
        default_factory=dict["RecordKey", "Publication"]
    )
    site_summaries: list[SiteImportSummary] = field(default_factory=list[SiteImportSummary])
    new_entries_saved: int = 0
    _failed_links: list[str] = field(default_factory=list[str])
    _failed_lookup: set[str] = field(default_factory=set[str])

    @property
    def failed_links(self) -> tuple[str, ...]:
        return tuple(self._failed_links)

    def add_failed_link(self, url: str) -> None:
        if url in self._failed_lookup:
            return
        self._failed_lookup.add(url)
        self._failed_links.append(url)

    def report(
        self,
        stage: ImportStage,
        message: str,
        *,
        current: int | None = None,
        total: int | None = None,
    ) -> None:
        log.debug("%s: %s", stage, message)
        if self.progress is not None:
            self.progress(ImportProgress(stage=stage, message=message, current=current, total=total))
