"""Domain port definitions for adapters."""

from __future__ import annotations

from .archive import ArchiveFile, ArchiveWriter
from .fetching import BatchFetchResult, FetchProgressCallback, PublicationFetcher, RawPublication
from .persistence import PublicationRepository, Repository, SiteRepository
from .unit_of_work import (
    ImportRepositories,
    ImportUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)
from .workbook import CellValue, Sheet, Workbook, WorkbookReader

__all__ = [
    "ArchiveFile",
    "ArchiveWriter",
    "BatchFetchResult",
    "CellValue",
    "FetchProgressCallback",
    "ImportRepositories",
    "ImportUnitOfWork",
    "PublicationFetcher",
    "PublicationRepository",
    "RawPublication",
    "Repository",
    "RepositoryCollection",
    "Sheet",
    "SiteRepository",
    "UnitOfWork",
    "Workbook",
    "WorkbookReader",
]
