"""Unit tests for SearchQuery and PageCursor."""

import base64

import pytest

from cuisine.domain.exceptions import InvalidCursorException, ValidationException
from cuisine.domain.value_objects.search import SCOPE_BROWSE, PageCursor, SearchQuery
from tests.fakes import make_recipe


def test_query_strips_free_text() -> None:
    query = SearchQuery(free_text="   ")
    assert query.free_text == ""
    assert not query.has_free_text
    assert query.is_empty


def test_query_words_are_lowercased_tokens() -> None:
    assert SearchQuery(free_text=" Tarte  POMMES ").words == ["tarte", "pommes"]


def test_query_drops_empty_filter_values() -> None:
    query = SearchQuery(filters={"category": "  ", "region": None})
    assert query.filters == {}
    assert query.is_empty


def test_query_rejects_unknown_filter() -> None:
    with pytest.raises(ValidationException) as exc_info:
        SearchQuery(filters={"author": "Marie"})
    assert exc_info.value.details == {"field": "author"}


def test_query_store_filters_use_document_fields() -> None:
    query = SearchQuery(filters={"category": "Dessert", "region": "67"})
    assert query.store_filters() == {"type": "Dessert", "position": "67"}


def test_query_scope_is_order_independent() -> None:
    a = SearchQuery(filters={"category": "Dessert", "region": "67"})
    b = SearchQuery(filters={"region": "67", "category": "Dessert"})
    assert a.scope == b.scope == "filter:category=Dessert|region=67"
    assert SearchQuery().scope == SCOPE_BROWSE


def test_query_scope_ignores_free_text() -> None:
    assert SearchQuery(free_text="tarte").scope == SCOPE_BROWSE


def test_cursor_token_decodes_to_same_cursor() -> None:
    cursor = PageCursor.from_item(make_recipe("r-9", "Crème brûlée"), "filter:category=Dessert")
    decoded = PageCursor.decode(cursor.encode())
    assert decoded == cursor


def test_cursor_token_is_url_safe() -> None:
    token = PageCursor(title="Tarte ??? >>>", id="x").encode()
    assert "+" not in token and "/" not in token


@pytest.mark.parametrize(
    "token",
    [
        "not base64 !!",
        base64.urlsafe_b64encode(b"not json").decode(),
        base64.urlsafe_b64encode(b"[1, 2]").decode(),
        base64.urlsafe_b64encode(b'{"t": "Tarte"}').decode(),
        base64.urlsafe_b64encode(b'{"t": "Tarte", "i": "", "s": "browse"}').decode(),
        "écrit",
    ],
)
def test_cursor_decode_rejects_garbage(token: str) -> None:
    with pytest.raises(InvalidCursorException) as exc_info:
        PageCursor.decode(token)
    assert exc_info.value.error_code == "INVALID_CURSOR"
    assert exc_info.value.details["field"] == "cursor"
