"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from itertools import batched
from typing import TYPE_CHECKING, Final, cast

from sqlalchemy import func, select

from pubimport.adapters.sqlalchemy.mappings import publication_table, site_table
from pubimport.domain.model import Publication, Site

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.orm import Session

# keeps IN clauses below SQLite's bound parameter limit
IN_CLAUSE_CHUNK_SIZE: Final[int] = 500


class SqlAlchemyPublicationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Publication) -> None:
        self.session.merge(entity)

    def add_batch(self, site_url: str, publications: Sequence[Publication]) -> None:
        for publication in publications:
            if publication.site_url != site_url:
                raise ValueError(
                    f"Publication {publication.id} belongs to {publication.site_url}, "
                    f"not {site_url}"
                )
            self.session.merge(publication)
        self.session.flush()

    def existing_ids(self, site_url: str, identifiers: Iterable[str]) -> set[str]:
        found: set[str] = set()
        for chunk in batched(dict.fromkeys(identifiers), IN_CLAUSE_CHUNK_SIZE):
            stmt = (
                select(publication_table.c.id)
                .where(publication_table.c.site_url == site_url)
                .where(publication_table.c.id.in_(chunk))
            )
            found.update(self.session.execute(stmt).scalars())
        return found

    def load_by_ids(self, site_url: str, identifiers: Iterable[str]) -> list[Publication]:
        requested = list(dict.fromkeys(identifiers))
        loaded: dict[str, Publication] = {}
        for chunk in batched(requested, IN_CLAUSE_CHUNK_SIZE):
            stmt = (
                select(Publication)
                .where(publication_table.c.site_url == site_url)
                .where(publication_table.c.id.in_(chunk))
            )
            for publication in self.session.execute(stmt).scalars():
                loaded[publication.id] = publication
        return [loaded[identifier] for identifier in requested if identifier in loaded]

    def count(self, site_url: str) -> int:
        stmt = (
            select(func.count())
            .select_from(publication_table)
            .where(publication_table.c.site_url == site_url)
        )
        return cast(int, self.session.execute(stmt).scalar_one())


class SqlAlchemySiteRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Site) -> None:
        self.session.add(entity)

    def get(self, site_id: str) -> Site | None:
        stmt = select(Site).where(site_table.c.id == site_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def list_all(self) -> list[Site]:
        stmt = select(Site).order_by(site_table.c._pk)  # noqa: SLF001
        return list(self.session.execute(stmt).scalars())

    def remove(self, site: Site) -> None:
        stored = self.get(site.id)
        if stored is not None:
            self.session.delete(stored)

    def save_all(self, sites: Sequence[Site]) -> None:
        for site in sites:
            stored = self.get(site.id)
            if stored is None:
                self.session.add(site)
                continue
            stored.name = site.name
            stored.url = site.url
            stored.entry_count = site.entry_count
            stored.last_updated = site.last_updated
        self.session.flush()


if TYPE_CHECKING:
    from pubimport.domain.ports.persistence import PublicationRepository, SiteRepository

    _session_stub = cast("Session", object())
    _publication_repo: PublicationRepository = SqlAlchemyPublicationRepository(_session_stub)
    _site_repo: SiteRepository = SqlAlchemySiteRepository(_session_stub)
