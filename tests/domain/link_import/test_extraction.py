from __future__ import annotations

import pytest

from pubimport.domain.link_import import NoValidUrlsError, extract_links, is_absolute_url
from pubimport.domain.ports.workbook import CellValue
from tests.helpers.link_import import FakeSheet, FakeWorkbook


def test_link_header_restricts_scan_to_link_columns() -> None:
    sheet = FakeSheet(
        rows=[
            ["Title", " LINK "],
            ["https://ignored.example/a", "https://a.example/1"],
            ["note", "https://a.example/2"],
        ]
    )

    assert extract_links(FakeWorkbook(sheets=[sheet])) == [
        "https://a.example/1",
        "https://a.example/2",
    ]


def test_without_header_every_cell_is_scanned_including_first_row() -> None:
    sheet = FakeSheet(
        rows=[
            ["https://a.example/1", "plain text"],
            [None, "https://b.example/2"],
        ]
    )

    assert extract_links(FakeWorkbook(sheets=[sheet])) == [
        "https://a.example/1",
        "https://b.example/2",
    ]


def test_hyperlink_target_is_preferred_over_cell_text() -> None:
    sheet = FakeSheet(
        rows=[
            ["Link"],
            [CellValue(text="see here", hyperlink=" https://a.example/target ")],
            [CellValue(text="https://a.example/text", hyperlink="not a url")],
        ]
    )

    assert extract_links(FakeWorkbook(sheets=[sheet])) == [
        "https://a.example/target",
        "https://a.example/text",
    ]


def test_duplicates_are_kept_across_sheets_in_order() -> None:
    first = FakeSheet(rows=[["https://a.example/1"]], name="one")
    second = FakeSheet(rows=[["https://a.example/1"], ["https://a.example/2"]], name="two")

    assert extract_links(FakeWorkbook(sheets=[first, second])) == [
        "https://a.example/1",
        "https://a.example/1",
        "https://a.example/2",
    ]


def test_sheet_offsets_are_respected() -> None:
    sheet = FakeSheet(rows=[["link"], ["https://a.example/1"]], min_row=3, min_column=2)

    assert extract_links(FakeWorkbook(sheets=[sheet])) == ["https://a.example/1"]


def test_empty_workbook_raises() -> None:
    with pytest.raises(NoValidUrlsError):
        extract_links(FakeWorkbook(sheets=[FakeSheet(rows=[])]))


def test_relative_and_malformed_urls_raise_when_nothing_else() -> None:
    sheet = FakeSheet(rows=[["/relative/path"], ["www.example.com"], ["http://[::1"]])

    with pytest.raises(NoValidUrlsError):
        extract_links(FakeWorkbook(sheets=[sheet]))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://a.example/x", True),
        ("ftp://files.example", True),
        ("a.example/x", False),
        ("mailto:someone@example.com", True),
        ("urn:isbn:0451450523", True),
        ("", False),
    ],
)
def test_is_absolute_url(value: str, *, expected: bool) -> None:
    assert is_absolute_url(value) is expected
