from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from pubimport.app import configured_sites, create_site, delete_site, import_workbook
from pubimport.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from pubimport.domain.link_import import ImportProgress, ImportSummary

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import publications linked from a workbook")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_cmd = subparsers.add_parser("import", help="Import publications from an Excel file")
    import_cmd.add_argument("file", type=Path, help="Path to the .xlsx workbook")
    import_cmd.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the generated ZIP archive (defaults to the working directory)",
    )

    sites = subparsers.add_parser("sites", help="Site management commands")
    sites_sub = sites.add_subparsers(dest="sites_command", required=True)
    sites_add = sites_sub.add_parser("add", help="Register a site")
    sites_add.add_argument("--name", type=str, required=True, help="Display name for the site")
    sites_add.add_argument("--url", type=str, required=True, help="Absolute base URL of the site")
    sites_sub.add_parser("list", help="List registered sites")
    sites_remove = sites_sub.add_parser("remove", help="Remove a site")
    sites_remove.add_argument("--id", dest="site_id", type=str, required=True, help="Site id")

    return parser.parse_args(list(argv))


def _log_progress(event: ImportProgress) -> None:
    if event.current is not None and event.total is not None:
        log.info("[%s] %s (%d/%d)", event.stage, event.message, event.current, event.total)
    else:
        log.info("[%s] %s", event.stage, event.message)


def _log_summary(summary: ImportSummary) -> None:
    log.info(
        "Import finished: total_links=%s, valid_links=%s, processed=%s, new=%s",
        summary.total_links,
        summary.valid_links,
        summary.processed_entries,
        summary.new_entries_saved,
    )
    for site_summary in summary.site_summaries:
        log.info(
            "  %s: links=%s, unique=%s, new=%s, existing=%s, failed=%s",
            site_summary.site_name,
            site_summary.total_links,
            site_summary.unique_entries,
            site_summary.new_entries_saved,
            site_summary.existing_entries,
            site_summary.failed_entries,
        )
    for url in summary.unmatched_links:
        log.warning("Unmatched link: %s", url)
    for url in summary.failed_links:
        if url not in summary.unmatched_links:
            log.warning("Failed link: %s", url)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        configure_logging()
    except ConfigurationError as exc:
        sys.exit(f"pubimport: {exc}")
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "import" and not parsed_args.file.is_file():
            raise ValueError(f"No such file: {parsed_args.file}")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "import":
            result, archive_path = import_workbook(
                parsed_args.file,
                output_dir=parsed_args.output_dir,
                progress=_log_progress,
            )
            _log_summary(result.summary)
            log.info("Archive written to %s", archive_path)
        elif parsed_args.command == "sites" and parsed_args.sites_command == "add":
            site = create_site(name=parsed_args.name, url=parsed_args.url)
            log.info("Created site %s", site.id)
        elif parsed_args.command == "sites" and parsed_args.sites_command == "list":
            for site in configured_sites():
                log.info(
                    "%s  %s  %s  entries=%s  last_updated=%s",
                    site.id,
                    site.name,
                    site.url,
                    site.entry_count,
                    site.last_updated,
                )
        elif parsed_args.command == "sites" and parsed_args.sites_command == "remove":
            site = delete_site(parsed_args.site_id)
            log.info("Removed site %s", site.id)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
