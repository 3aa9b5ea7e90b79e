"""Reassemble resolved publications in input order and bundle them."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .errors import NoEntriesResolvedError
from .rendering import publication_file_name, render_publication

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from pubimport.domain.model import Publication
    from pubimport.domain.ports.archive import ArchiveWriter

    from .context import ImportContext, ParsedLink, RecordKey

log = getLogger(__name__)


def assemble_publications(
    unique_links: Iterable[ParsedLink],
    *,
    context: ImportContext,
) -> list[Publication]:
    """Resolve each link to a publication, in link order.

    Links without a publication are recorded as failed. Raises
    ``NoEntriesResolvedError`` when nothing resolves.
    """

    ordered: list[Publication] = []
    emitted: set[RecordKey] = set()

    for link in unique_links:
        key = link.key
        if key is None or key in emitted:
            continue

        publication = context.publications.get(key)
        if publication is None:
            context.add_failed_link(link.original_url)
            continue

        ordered.append(publication)
        emitted.add(key)

    if not ordered:
        raise NoEntriesResolvedError

    log.info("Assembled %d publications", len(ordered))
    return ordered


def build_archive(publications: Sequence[Publication], writer: ArchiveWriter) -> bytes:
    files = [(publication_file_name(item), render_publication(item)) for item in publications]
    return writer(files)
