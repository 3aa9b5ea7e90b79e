"""SQLAlchemy adapter package for pubimport."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyPublicationRepository, SqlAlchemySiteRepository
from .unit_of_work import (
    SqlAlchemyImportUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyImportUnitOfWork",
    "SqlAlchemyPublicationRepository",
    "SqlAlchemySiteRepository",
    "StartupError",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
