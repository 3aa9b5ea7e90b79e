"""Publication records fetched from remote sites and kept in the local store."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final, TypeGuard

DEFAULT_PUBLICATION_TYPE: Final[str] = "publication"

type PublicationMetadata = dict[str, object]


def metadata_text(value: object, *, separator: str = ",") -> str:
    """Render a loosely-typed metadata value as a single line of text.

    Missing and falsy values render as an empty string, booleans as ``true``.
    Sequences are joined with ``separator``; their items follow the same rules
    except that ``False`` renders as ``false`` and nested sequences join with ``,``.
    """

    if value is None or value is False or value == "" or value == 0:
        return ""
    if value is True:
        return "true"
    if _is_sequence(value):
        return separator.join(_item_text(item) for item in value)
    return str(value)


def _is_sequence(value: object) -> TypeGuard[Sequence[object]]:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _item_text(item: object) -> str:
    if item is None:
        return ""
    if isinstance(item, bool):
        return "true" if item else "false"
    if _is_sequence(item):
        return ",".join(_item_text(nested) for nested in item)
    return str(item)


@dataclass(eq=False, kw_only=True)
class Publication:
    """A single publication record.

    Identity is ``(site, id)``; the same ``id`` on two sites denotes two records.
    ``metadata`` keeps the raw remote payload verbatim.
    """

    id: str
    site_url: str
    title: str = ""
    abstract: str = ""
    body: str = ""
    published_date: str = ""
    type: str = DEFAULT_PUBLICATION_TYPE
    seen: bool = False
    metadata: PublicationMetadata = field(default_factory=dict[str, object])

    def metadata_field(self, name: str, *, separator: str = ",") -> str:
        return metadata_text(self.metadata.get(name), separator=separator)

    @property
    def jnr(self) -> str:
        return self.metadata_field("jnr")

    @property
    def date(self) -> str:
        return self.metadata_field("date") or self.published_date

    @property
    def is_board_ruling(self) -> str:
        return self.metadata_field("is_board_ruling")

    @property
    def is_brought_to_court(self) -> str:
        return self.metadata_field("is_brought_to_court")

    @property
    def authority(self) -> str:
        return self.metadata_field("authority")

    @property
    def categories(self) -> str:
        return self.metadata_field("categories", separator=", ")

    @property
    def original_url(self) -> str:
        return self.metadata_field("url")
