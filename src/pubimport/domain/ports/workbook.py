"""Ports for reading tabular workbooks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


@dataclass(frozen=True, slots=True)
class CellValue:
    """Text and attached hyperlink target of one cell; either may be absent."""

    text: str | None = None
    hyperlink: str | None = None


@runtime_checkable
class Sheet(Protocol):
    """Rectangular cell range of a single worksheet, 1-based and inclusive."""

    @property
    def name(self) -> str: ...

    @property
    def min_row(self) -> int: ...

    @property
    def max_row(self) -> int: ...

    @property
    def min_column(self) -> int: ...

    @property
    def max_column(self) -> int: ...

    def cell(self, row: int, column: int) -> CellValue | None: ...


@runtime_checkable
class Workbook(Protocol):
    @property
    def sheets(self) -> Sequence[Sheet]: ...


type WorkbookReader = Callable[[bytes], Workbook]
