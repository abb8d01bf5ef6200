"""Resource identifiers for the cake catalog and the router that classifies them.

A resource identifier looks like ``content://<authority>/cakes`` for the whole
collection or ``content://<authority>/cakes/<id>`` for a single row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final
from urllib.parse import urlsplit

from bakery.core.errors import InvalidResource

CONTENT_SCHEME: Final[str] = "content"
PATH_CAKES: Final[str] = "cakes"
TABLE_NAME: Final[str] = "cakes"

COLUMN_ID: Final[str] = "id"
COLUMN_NAME: Final[str] = "name"
COLUMN_OCCASION: Final[str] = "occasion"
COLUMN_PRICE: Final[str] = "price"
COLUMN_QUANTITY: Final[str] = "quantity"

CURSOR_DIR_BASE_TYPE: Final[str] = "vnd.android.cursor.dir"
CURSOR_ITEM_BASE_TYPE: Final[str] = "vnd.android.cursor.item"


@dataclass(frozen=True)
class ResourceURI:
    authority: str
    segments: tuple[str, ...] = ()
    scheme: str = CONTENT_SCHEME

    @classmethod
    def parse(cls, value: str | ResourceURI) -> ResourceURI:
        if isinstance(value, ResourceURI):
            return value
        parts = urlsplit(value)
        segments = tuple(segment for segment in parts.path.split("/") if segment)
        return cls(authority=parts.netloc, segments=segments, scheme=parts.scheme or CONTENT_SCHEME)

    def with_appended_id(self, item_id: int) -> ResourceURI:
        return ResourceURI(self.authority, self.segments + (str(item_id),), self.scheme)

    def parse_id(self) -> int | None:
        """Return the trailing numeric segment, if there is one."""

        if self.segments and _is_row_id(self.segments[-1]):
            return int(self.segments[-1])
        return None

    def is_ancestor_of(self, other: ResourceURI) -> bool:
        """True when ``other`` lives strictly below this resource."""

        return (
            self.authority == other.authority
            and len(other.segments) > len(self.segments)
            and other.segments[: len(self.segments)] == self.segments
        )

    def __str__(self) -> str:
        path = "/".join(self.segments)
        return f"{self.scheme}://{self.authority}/{path}" if path else f"{self.scheme}://{self.authority}"


def content_uri(authority: str) -> ResourceURI:
    """Collection identifier for the cakes table under ``authority``."""

    return ResourceURI(authority, (PATH_CAKES,))


def _is_row_id(segment: str) -> bool:
    return segment.isascii() and segment.isdigit()


class MatchKind(str, Enum):
    COLLECTION = "COLLECTION"
    ITEM = "ITEM"
    NO_MATCH = "NO_MATCH"


@dataclass(frozen=True)
class ResourceMatch:
    kind: MatchKind
    uri: ResourceURI
    item_id: int | None = None

    @property
    def matched(self) -> bool:
        return self.kind is not MatchKind.NO_MATCH


@dataclass(frozen=True)
class ResourceRouter:
    """Classifies resource identifiers as collection, item or unmatched.

    Matching looks only at the authority and path; the scheme is ignored and
    whether the addressed row exists is never consulted.
    """

    authority: str
    path: str = PATH_CAKES
    collection_uri: ResourceURI = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "collection_uri", ResourceURI(self.authority, (self.path,)))

    def match(self, target: str | ResourceURI) -> ResourceMatch:
        uri = ResourceURI.parse(target)
        if uri.authority != self.authority or not uri.segments or uri.segments[0] != self.path:
            return ResourceMatch(MatchKind.NO_MATCH, uri)
        if len(uri.segments) == 1:
            return ResourceMatch(MatchKind.COLLECTION, uri)
        if len(uri.segments) == 2 and _is_row_id(uri.segments[1]):
            return ResourceMatch(MatchKind.ITEM, uri, int(uri.segments[1]))
        return ResourceMatch(MatchKind.NO_MATCH, uri)

    def get_type(self, target: str | ResourceURI) -> str:
        """Return the MIME type describing what ``target`` addresses."""

        resolved = self.match(target)
        if resolved.kind is MatchKind.COLLECTION:
            return f"{CURSOR_DIR_BASE_TYPE}/{self.authority}/{self.path}"
        if resolved.kind is MatchKind.ITEM:
            return f"{CURSOR_ITEM_BASE_TYPE}/{self.authority}/{self.path}"
        raise InvalidResource(f"Unknown URI {resolved.uri}", resource=resolved.uri)
