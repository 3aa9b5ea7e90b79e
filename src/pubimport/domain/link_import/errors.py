"""Errors raised by the link import pipeline.

Every ``LinkImportError`` aborts a run; per-link problems are recorded on the
run context instead of being raised.
"""

from __future__ import annotations


class LinkImportError(RuntimeError):
    """Base class for fatal link import failures."""

    default_message = "Link import failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NoFileProvidedError(LinkImportError):
    default_message = "No file provided"


class NoSitesConfiguredError(LinkImportError):
    default_message = "No sites configured. Please add sites before importing an Excel file."


class WorkbookReadError(LinkImportError):
    default_message = "The uploaded file could not be read as a workbook."


class NoValidUrlsError(LinkImportError):
    default_message = "The uploaded Excel file did not contain any valid URLs."


class NoMatchingLinksError(LinkImportError):
    default_message = (
        "No links in the Excel file matched known sites or contained recognizable GUIDs."
    )


class NoEntriesResolvedError(LinkImportError):
    default_message = (
        "No entries could be resolved for download. Please verify the links in the Excel file."
    )


class PublicationMappingError(ValueError):
    """Raised when a fetched payload cannot be turned into a publication."""
