"""Bulk import of publications referenced by spreadsheet links.

The pipeline runs in explicit stages that share one ``ImportContext`` per run:

1) extract candidate URLs from the workbook
2) classify each URL into (site, identifier) and plan per-site work
3) per site, reload stored publications and fetch/persist the missing ones
4) reassemble publications in input order and bundle them into an archive
"""

from __future__ import annotations

from .assembly import assemble_publications, build_archive
from .classification import classify_link, extract_identifier, is_guid, match_site
from .context import (
    ImportContext,
    ImportResult,
    ImportSummary,
    LinkPlan,
    ParsedLink,
    SiteImportSummary,
    SitePlan,
)
from .errors import (
    LinkImportError,
    NoEntriesResolvedError,
    NoFileProvidedError,
    NoMatchingLinksError,
    NoSitesConfiguredError,
    NoValidUrlsError,
    PublicationMappingError,
    WorkbookReadError,
)
from .extraction import extract_links, is_absolute_url
from .mapping import publication_from_payload
from .orchestrator import SiteReconciliation, reconcile_sites
from .planning import plan_links
from .progress import ImportProgress, ImportStage, ProgressSink
from .rendering import archive_file_name, publication_file_name, render_publication
from .runner import run_link_import

__all__ = [
    "ImportContext",
    "ImportProgress",
    "ImportResult",
    "ImportStage",
    "ImportSummary",
    "LinkImportError",
    "LinkPlan",
    "NoEntriesResolvedError",
    "NoFileProvidedError",
    "NoMatchingLinksError",
    "NoSitesConfiguredError",
    "NoValidUrlsError",
    "ParsedLink",
    "ProgressSink",
    "PublicationMappingError",
    "SiteImportSummary",
    "SitePlan",
    "SiteReconciliation",
    "WorkbookReadError",
    "archive_file_name",
    "assemble_publications",
    "build_archive",
    "classify_link",
    "extract_identifier",
    "extract_links",
    "is_absolute_url",
    "is_guid",
    "match_site",
    "plan_links",
    "publication_file_name",
    "publication_from_payload",
    "reconcile_sites",
    "render_publication",
    "run_link_import",
]
