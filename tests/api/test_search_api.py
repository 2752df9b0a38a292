"""API tests for GET /api/v1/recipes/search."""

from httpx import AsyncClient

from cuisine.api.v1.dependencies import get_recipe_repo
from cuisine.main import app
from tests.fakes import failing_repo

SEARCH = "/api/v1/recipes/search"


def _ids(body: dict) -> list[str]:
    return [r["id"] for r in body["results"]]


async def test_keyword_search(api_client: AsyncClient) -> None:
    response = await api_client.get(SEARCH, params={"q": "tart"})
    assert response.status_code == 200
    body = response.json()
    assert body["mode"] == "keyword"
    assert sorted(_ids(body)[:2]) == ["1", "2"]
    assert _ids(body)[2:] == ["6"]
    assert body["corrected_query"] == "tarte"
    assert body["has_more"] is False
    assert body["next_cursor"] is None
    assert all(0.5 <= r["score"] <= 1.0 for r in body["results"])
    assert body["results"][2]["score"] == 0.5


async def test_keyword_search_with_filter(api_client: AsyncClient) -> None:
    response = await api_client.get(SEARCH, params={"q": "tarte", "region": "75"})
    assert response.status_code == 200
    assert _ids(response.json()) == ["2"]


async def test_browse_pages_with_cursor(api_client: AsyncClient) -> None:
    first = await api_client.get(SEARCH, params={"page_size": 4})
    assert first.status_code == 200
    body = first.json()
    assert body["mode"] == "browse"
    assert _ids(body) == ["3", "6", "4", "5"]
    assert body["has_more"] is True
    assert all(r["score"] is None for r in body["results"])

    second = await api_client.get(
        SEARCH, params={"page_size": 4, "cursor": body["next_cursor"]}
    )
    assert second.status_code == 200
    assert _ids(second.json()) == ["2", "1"]
    assert second.json()["has_more"] is False


async def test_filter_search(api_client: AsyncClient) -> None:
    response = await api_client.get(
        SEARCH, params={"category": "Dessert", "region": "75"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["mode"] == "filter"
    assert _ids(body) == ["4", "2"]
    assert {r["category"] for r in body["results"]} == {"Dessert"}


async def test_result_fields(api_client: AsyncClient) -> None:
    response = await api_client.get(SEARCH, params={"category": "Dessert", "page_size": 1})
    result = response.json()["results"][0]
    assert result == {
        "id": "4",
        "title": "Crème brûlée",
        "category": "Dessert",
        "region": "75",
        "images": [],
        "url": "creme-brulee",
        "score": None,
    }


async def test_invalid_cursor_is_400(api_client: AsyncClient) -> None:
    response = await api_client.get(SEARCH, params={"cursor": "@@@"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_CURSOR"
    assert body["details"]["field"] == "cursor"


async def test_page_size_zero_is_422(api_client: AsyncClient) -> None:
    response = await api_client.get(SEARCH, params={"page_size": 0})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_page_size_is_capped(api_client: AsyncClient, recipe_repo) -> None:
    response = await api_client.get(SEARCH, params={"page_size": 10_000})
    assert response.status_code == 200
    assert recipe_repo.calls[-1] == ("get_all", 51, None)


async def test_query_too_long_is_422(api_client: AsyncClient) -> None:
    response = await api_client.get(SEARCH, params={"q": "a" * 201})
    assert response.status_code == 422


async def test_store_failure_is_503(api_client: AsyncClient) -> None:
    app.dependency_overrides[get_recipe_repo] = lambda: failing_repo()
    response = await api_client.get(SEARCH)
    assert response.status_code == 503
    assert response.json()["error"] == "RETRIEVAL_FAILED"


async def test_search_without_store_is_503(client: AsyncClient) -> None:
    response = await client.get(SEARCH, params={"q": "tarte"})
    assert response.status_code == 503
    assert response.json()["error"] == "HTTP_ERROR"
