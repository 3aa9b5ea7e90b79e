"""Progress events emitted while an import runs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class ImportStage(StrEnum):
    PARSING = "parsing"
    MATCHING = "matching"
    FETCHING = "fetching"
    SAVING = "saving"
    ZIPPING = "zipping"
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class ImportProgress:
    stage: ImportStage
    message: str
    current: int | None = None
    total: int | None = None


type ProgressSink = Callable[[ImportProgress], None]
