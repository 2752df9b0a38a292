"""Firestore REST client and repositories against a mocked HTTP transport."""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from cuisine.domain.value_objects.search import PageCursor
from cuisine.infrastructure.exceptions import RetrievalFailedException
from cuisine.infrastructure.firebase._rest_client import FirestoreRESTClient
from cuisine.infrastructure.firebase.repositories import (
    FirestoreLikeRepository,
    FirestoreRecipeRepository,
)

DOCS = "projects/demo/databases/(default)/documents"


def _doc(collection: str, doc_id: str, **fields) -> dict:
    encoded = {}
    for key, value in fields.items():
        if isinstance(value, list):
            encoded[key] = {"arrayValue": {"values": [{"stringValue": v} for v in value]}}
        else:
            encoded[key] = {"stringValue": value}
    return {"name": f"{DOCS}/{collection}/{doc_id}", "fields": encoded}


class _Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


def _client(recorder: _Recorder) -> FirestoreRESTClient:
    credentials = MagicMock(valid=True, token="test-token")
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return FirestoreRESTClient("demo", credentials, http_client=http)


def _run_query_response(*docs: dict) -> httpx.Response:
    payload = [{"document": d, "readTime": "2024-01-01T00:00:00Z"} for d in docs]
    if not payload:
        payload = [{"readTime": "2024-01-01T00:00:00Z"}]
    return httpx.Response(200, json=payload)


async def test_get_all_builds_ordered_query_with_cursor() -> None:
    recorder = _Recorder(_run_query_response(_doc("recipes", "r2", title="Tarte Tatin")))
    repo = FirestoreRecipeRepository(_client(recorder))

    cursor = PageCursor(title="Quiche lorraine", id="r1")
    items = await repo.get_all("title", 11, cursor)

    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.url.path.endswith(":runQuery")
    assert request.headers["Authorization"] == "Bearer test-token"
    query = recorder.body()["structuredQuery"]
    assert query["from"] == [{"collectionId": "recipes"}]
    assert query["orderBy"] == [
        {"field": {"fieldPath": "title"}, "direction": "ASCENDING"},
        {"field": {"fieldPath": "__name__"}, "direction": "ASCENDING"},
    ]
    assert query["startAt"] == {
        "values": [
            {"stringValue": "Quiche lorraine"},
            {"referenceValue": f"{DOCS}/recipes/r1"},
        ],
        "before": False,
    }
    assert query["limit"] == 11
    assert "where" not in query
    assert [i.id for i in items] == ["r2"]


async def test_equality_filters_use_composite_and() -> None:
    recorder = _Recorder(_run_query_response())
    repo = FirestoreRecipeRepository(_client(recorder))

    assert await repo.query_by_equality_filters({"type": "Dessert", "position": "75"}, "title", 5) == []

    where = recorder.body()["structuredQuery"]["where"]
    assert where["compositeFilter"]["op"] == "AND"
    assert where["compositeFilter"]["filters"] == [
        {
            "fieldFilter": {
                "field": {"fieldPath": "position"},
                "op": "EQUAL",
                "value": {"stringValue": "75"},
            }
        },
        {
            "fieldFilter": {
                "field": {"fieldPath": "type"},
                "op": "EQUAL",
                "value": {"stringValue": "Dessert"},
            }
        },
    ]


async def test_single_equality_filter_is_plain_field_filter() -> None:
    recorder = _Recorder(_run_query_response())
    repo = FirestoreRecipeRepository(_client(recorder))
    await repo.query_by_equality_filters({"type": "Plat"}, "title", 5)
    where = recorder.body()["structuredQuery"]["where"]
    assert where["fieldFilter"]["field"] == {"fieldPath": "type"}
    assert "startAt" not in recorder.body()["structuredQuery"]


async def test_contains_any_query() -> None:
    recorder = _Recorder(
        _run_query_response(
            _doc("recipes", "r1", title="Tarte aux pommes", type="Dessert", position="67",
                 titleKeywords=["tarte", "aux", "pommes"], images=["a.jpg"], url="tarte-aux-pommes"),
        )
    )
    repo = FirestoreRecipeRepository(_client(recorder))

    items = await repo.query_by_field_contains_any("titleKeywords", ["tarte", "tartes"], "title", 40)

    where = recorder.body()["structuredQuery"]["where"]["fieldFilter"]
    assert where["op"] == "ARRAY_CONTAINS_ANY"
    assert where["value"] == {
        "arrayValue": {"values": [{"stringValue": "tarte"}, {"stringValue": "tartes"}]}
    }
    item = items[0]
    assert item.title == "Tarte aux pommes"
    assert item.category == "Dessert"
    assert item.region == "67"
    assert item.keywords == ("tarte", "aux", "pommes")
    assert item.images == ("a.jpg",)
    assert item.url == "tarte-aux-pommes"


async def test_contains_any_without_values_skips_the_store() -> None:
    recorder = _Recorder()
    repo = FirestoreRecipeRepository(_client(recorder))
    assert await repo.query_by_field_contains_any("titleKeywords", [], "title", 10) == []
    assert recorder.requests == []


async def test_documents_without_title_are_skipped() -> None:
    recorder = _Recorder(
        _run_query_response(
            _doc("recipes", "r1", title="Flan"),
            _doc("recipes", "r2", type="Dessert"),
            _doc("recipes", "r3", title="   "),
        )
    )
    items = await FirestoreRecipeRepository(_client(recorder)).get_all("title", 10)
    assert [i.id for i in items] == ["r1"]


async def test_http_error_becomes_retrieval_failed() -> None:
    recorder = _Recorder(httpx.Response(500, json={"error": {"message": "boom"}}))
    repo = FirestoreRecipeRepository(_client(recorder))
    with pytest.raises(RetrievalFailedException) as exc_info:
        await repo.get_all("title", 10)
    assert exc_info.value.details["operation"] == "get_all"
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


async def test_transport_error_becomes_retrieval_failed() -> None:
    recorder = _Recorder(httpx.ConnectError("connection refused"))
    repo = FirestoreRecipeRepository(_client(recorder))
    with pytest.raises(RetrievalFailedException):
        await repo.query_by_equality_filters({"type": "Plat"}, "title", 5)


async def test_get_by_id() -> None:
    recorder = _Recorder(
        httpx.Response(200, json=_doc("recipes", "r1", title="Flan")),
        httpx.Response(404, json={}),
    )
    repo = FirestoreRecipeRepository(_client(recorder), "recettes")

    item = await repo.get_by_id("r1")
    assert item is not None and item.title == "Flan"
    assert recorder.requests[0].url.path.endswith("/documents/recettes/r1")
    assert await repo.get_by_id("nope") is None


async def test_update_search_fields_patches_with_mask() -> None:
    recorder = _Recorder(httpx.Response(200, json={}))
    repo = FirestoreRecipeRepository(_client(recorder))

    await repo.update_search_fields("r1", ["flan"], "flan")

    request = recorder.requests[0]
    assert request.method == "PATCH"
    assert request.url.params.get_list("updateMask.fieldPaths") == ["titleKeywords", "url"]
    assert request.url.params["currentDocument.exists"] == "true"
    assert recorder.body() == {
        "fields": {
            "titleKeywords": {"arrayValue": {"values": [{"stringValue": "flan"}]}},
            "url": {"stringValue": "flan"},
        }
    }


async def test_like_repo_lists_user_likes_deduplicated() -> None:
    recorder = _Recorder(
        _run_query_response(
            _doc("likes", "l1", userId="bob", recetteId="r1"),
            _doc("likes", "l2", userId="bob", recetteId="r5"),
            _doc("likes", "l3", userId="bob", recetteId="r1"),
        )
    )
    repo = FirestoreLikeRepository(_client(recorder))

    assert await repo.list_recipe_ids_liked_by("bob") == ["r1", "r5"]
    where = recorder.body()["structuredQuery"]["where"]["fieldFilter"]
    assert where["field"] == {"fieldPath": "userId"}
    assert where["value"] == {"stringValue": "bob"}


async def test_like_counts_follow_page_tokens() -> None:
    recorder = _Recorder(
        httpx.Response(
            200,
            json={
                "documents": [
                    _doc("likes", "l1", userId="a", recetteId="r1"),
                    _doc("likes", "l2", userId="b", recetteId="r1"),
                ],
                "nextPageToken": "page-2",
            },
        ),
        httpx.Response(200, json={"documents": [_doc("likes", "l3", userId="a", recetteId="r2")]}),
    )
    repo = FirestoreLikeRepository(_client(recorder))

    assert await repo.count_by_recipe() == {"r1": 2, "r2": 1}
    assert "pageToken" not in recorder.requests[0].url.params
    assert recorder.requests[1].url.params["pageToken"] == "page-2"


async def test_like_counts_are_cached() -> None:
    recorder = _Recorder(
        httpx.Response(200, json={"documents": [_doc("likes", "l1", userId="a", recetteId="r1")]})
    )
    cache = MagicMock()
    cache.is_available.return_value = True
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock(return_value=True)
    repo = FirestoreLikeRepository(_client(recorder), cache=cache, cache_ttl=60)

    assert await repo.count_by_recipe() == {"r1": 1}
    cache.set.assert_awaited_once_with("likes:counts:likes", {"r1": 1}, ttl=60)

    cache.get = AsyncMock(return_value={"r1": 4})
    assert await repo.count_by_recipe() == {"r1": 4}
    assert len(recorder.requests) == 1


async def test_client_closes_only_its_own_http_client() -> None:
    http = AsyncMock(spec=httpx.AsyncClient)
    client = FirestoreRESTClient("demo", MagicMock(), http_client=http)
    await client.aclose()
    http.aclose.assert_not_awaited()
