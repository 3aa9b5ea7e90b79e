"""Locate candidate URLs in a workbook."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final
from urllib.parse import urlsplit

from .errors import NoValidUrlsError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pubimport.domain.ports.workbook import CellValue, Sheet, Workbook

log = getLogger(__name__)

LINK_COLUMN_HEADER: Final[str] = "link"


def is_absolute_url(value: str) -> bool:
    """Return whether ``value`` parses as a URL with a scheme.

    Hostless links such as ``mailto:`` still count; they are reported as unmatched later.
    """

    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme)


def extract_links(workbook: Workbook) -> list[str]:
    """Return every URL in ``workbook`` in sheet, row, column order.

    Duplicates are kept. Raises ``NoValidUrlsError`` when nothing was found.
    """

    links: list[str] = []
    for sheet in workbook.sheets:
        sheet_links = list(_iter_sheet_links(sheet))
        log.debug("Sheet %r yielded %d links", sheet.name, len(sheet_links))
        links.extend(sheet_links)

    if not links:
        raise NoValidUrlsError
    return links


def _iter_sheet_links(sheet: Sheet) -> Iterator[str]:
    header_row = sheet.min_row
    all_columns = list(range(sheet.min_column, sheet.max_column + 1))
    link_columns = [
        column
        for column in all_columns
        if _is_link_header(_cell_text(sheet.cell(header_row, column)))
    ]

    columns = link_columns or all_columns
    first_row = header_row + 1 if link_columns else header_row

    for row in range(first_row, sheet.max_row + 1):
        for column in columns:
            url = _url_from_cell(sheet.cell(row, column))
            if url is not None:
                yield url


def _is_link_header(value: str | None) -> bool:
    return value is not None and value.lower() == LINK_COLUMN_HEADER


def _cell_text(cell: CellValue | None) -> str | None:
    if cell is None or cell.text is None:
        return None
    return cell.text.strip() or None


def _url_from_cell(cell: CellValue | None) -> str | None:
    if cell is None:
        return None

    if cell.hyperlink:
        target = cell.hyperlink.strip()
        if is_absolute_url(target):
            return target

    text = _cell_text(cell)
    if text is not None and is_absolute_url(text):
        return text
    return None
