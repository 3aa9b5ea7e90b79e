"""ZIP archive writer for rendered publications."""

from __future__ import annotations

from io import BytesIO
from logging import getLogger
from typing import TYPE_CHECKING, Final
from zipfile import ZIP_DEFLATED, ZipFile, ZipInfo

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pubimport.domain.ports.archive import ArchiveFile

log = getLogger(__name__)

COMPRESS_LEVEL: Final[int] = 1
# fixed entry timestamp and mode so identical inputs give identical bytes
ENTRY_DATE_TIME: Final[tuple[int, int, int, int, int, int]] = (1980, 1, 1, 0, 0, 0)
ENTRY_MODE: Final[int] = 0o644


def write_zip_archive(files: Sequence[ArchiveFile]) -> bytes:
    """Deflate ``files`` into a ZIP archive, favouring speed over size.

    A repeated file name keeps its first position and its last content.
    """

    entries: dict[str, str] = {}
    for name, content in files:
        if name in entries:
            log.warning("Duplicate archive entry %s replaced", name)
        entries[name] = content

    buffer = BytesIO()
    with ZipFile(buffer, mode="w", compression=ZIP_DEFLATED, compresslevel=COMPRESS_LEVEL) as zf:
        for name, content in entries.items():
            info = ZipInfo(name, date_time=ENTRY_DATE_TIME)
            info.compress_type = ZIP_DEFLATED
            info.external_attr = ENTRY_MODE << 16
            zf.writestr(info, content.encode("utf-8"), compresslevel=COMPRESS_LEVEL)
    return buffer.getvalue()
