"""Port for bundling rendered publications into a single archive."""

from __future__ import annotations

from collections.abc import Callable, Sequence

type ArchiveFile = tuple[str, str]
type ArchiveWriter = Callable[[Sequence[ArchiveFile]], bytes]
