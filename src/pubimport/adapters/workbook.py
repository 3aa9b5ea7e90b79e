"""Workbook reader backed by openpyxl."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from logging import getLogger
from typing import TYPE_CHECKING
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from pubimport.domain.link_import.errors import WorkbookReadError
from pubimport.domain.ports.workbook import CellValue

if TYPE_CHECKING:
    from collections.abc import Sequence

    from openpyxl.worksheet.worksheet import Worksheet

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OpenpyxlSheet:
    worksheet: Worksheet

    @property
    def name(self) -> str:
        return self.worksheet.title

    @property
    def min_row(self) -> int:
        return self.worksheet.min_row

    @property
    def max_row(self) -> int:
        return self.worksheet.max_row

    @property
    def min_column(self) -> int:
        return self.worksheet.min_column

    @property
    def max_column(self) -> int:
        return self.worksheet.max_column

    def cell(self, row: int, column: int) -> CellValue | None:
        cell = self.worksheet.cell(row=row, column=column)
        text = cell.value if isinstance(cell.value, str) else None
        hyperlink = cell.hyperlink.target if cell.hyperlink is not None else None
        if text is None and hyperlink is None:
            return None
        return CellValue(text=text, hyperlink=hyperlink)


@dataclass(frozen=True, slots=True)
class OpenpyxlWorkbook:
    sheets: Sequence[OpenpyxlSheet]


def read_workbook(content: bytes) -> OpenpyxlWorkbook:
    """Load an ``.xlsx`` document from memory.

    Hyperlinks are only available outside openpyxl's read-only mode, so the
    whole workbook is loaded.
    """

    try:
        workbook = load_workbook(BytesIO(content), data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError, ValueError) as exc:
        log.warning("Unable to read workbook: %s", exc)
        raise WorkbookReadError from exc

    sheets = tuple(OpenpyxlSheet(worksheet) for worksheet in workbook.worksheets)
    log.debug("Loaded workbook with sheets %s", [sheet.name for sheet in sheets])
    return OpenpyxlWorkbook(sheets=sheets)
