"""Search value objects: the query and the pagination cursor.

Value objects are immutable and validate themselves on construction.
"""

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from cuisine.core.constants import FILTER_FIELDS
from cuisine.domain.entities.recipe import SearchableItem
from cuisine.domain.exceptions import InvalidCursorException, ValidationException

SCOPE_BROWSE = "browse"


@dataclass(frozen=True)
class SearchQuery:
    """One search request: free text plus optional exact-match filters.

    Free text is stripped (whitespace-only becomes empty). Filters with an
    empty value are dropped; unknown filter names are rejected.
    """

    free_text: str = ""
    filters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "free_text", (self.free_text or "").strip())
        cleaned: dict[str, str] = {}
        for name, value in (self.filters or {}).items():
            if name not in FILTER_FIELDS:
                raise ValidationException(
                    f"Unknown filter {name!r}; expected one of {sorted(FILTER_FIELDS)}",
                    field=name,
                )
            if value is None:
                continue
            value = str(value).strip()
            if value:
                cleaned[name] = value
        object.__setattr__(self, "filters", cleaned)

    @property
    def words(self) -> list[str]:
        """Lowercased whitespace-separated tokens of the free text."""
        return self.free_text.lower().split()

    @property
    def has_free_text(self) -> bool:
        return bool(self.free_text)

    @property
    def has_filters(self) -> bool:
        return bool(self.filters)

    @property
    def is_empty(self) -> bool:
        """True when neither free text nor filters are set (browse mode)."""
        return not self.has_free_text and not self.has_filters

    @property
    def scope(self) -> str:
        """Fingerprint of the ordering/filters a cursor is valid for."""
        if not self.filters:
            return SCOPE_BROWSE
        parts = "|".join(f"{k}={v}" for k, v in sorted(self.filters.items()))
        return f"filter:{parts}"

    def store_filters(self) -> dict[str, str]:
        """Filters keyed by recipe document field (for store-side predicates)."""
        return {FILTER_FIELDS[name]: value for name, value in self.filters.items()}


@dataclass(frozen=True)
class PageCursor:
    """Forward-only cursor: last item seen under ascending-title ordering.

    Only valid for the scope it was issued under; a different scope means
    the filters changed and listing restarts from the beginning.
    """

    title: str
    id: str
    scope: str = SCOPE_BROWSE

    @classmethod
    def from_item(cls, item: SearchableItem, scope: str) -> "PageCursor":
        return cls(title=item.title, id=item.id, scope=scope)

    def encode(self) -> str:
        """Return the opaque URL-safe token handed to clients."""
        raw = json.dumps(
            {"t": self.title, "i": self.id, "s": self.scope},
            separators=(",", ":"),
            ensure_ascii=False,
        )
        return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")

    @classmethod
    def decode(cls, token: str) -> "PageCursor":
        """Parse a token produced by encode(); raise InvalidCursorException otherwise."""
        try:
            data: Any = json.loads(base64.urlsafe_b64decode(token.encode("ascii")))
        except (binascii.Error, UnicodeError, ValueError) as e:
            raise InvalidCursorException("not a valid cursor token") from e
        if not isinstance(data, dict):
            raise InvalidCursorException("cursor payload must be an object")
        title, item_id, scope = data.get("t"), data.get("i"), data.get("s")
        if not all(isinstance(v, str) for v in (title, item_id, scope)) or not item_id:
            raise InvalidCursorException("cursor payload is incomplete")
        return cls(title=title, id=item_id, scope=scope)
