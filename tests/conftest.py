"""Pytest configuration and fixtures for cuisine.

HTTP tests use cuisine.main:app through ASGITransport (lifespan does not
run, so no Firestore, Redis or telemetry is started). Repositories are
replaced with the in-memory fakes from tests.fakes.
"""

import os

os.environ.setdefault("TELEMETRY_ENABLED", "false")
os.environ.setdefault("REDIS_ENABLED", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from cuisine.api.v1.dependencies import (  # noqa: E402
    get_like_repo,
    get_recipe_repo,
    get_title_corpus,
)
from cuisine.core.limiter import limiter  # noqa: E402
from cuisine.main import app  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeLikeRepository,
    FakeRecipeRepository,
    FakeTitleCorpus,
    make_recipe,
)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Rate limit counters are process-wide; start each test from zero."""
    limiter.reset()
    yield


@pytest.fixture
def recipes() -> list:
    """Small catalog: two tarts, desserts and mains across two departments."""
    return [
        make_recipe("1", "Tarte aux pommes", "Dessert", "67"),
        make_recipe("2", "Tarte Tatin", "Dessert", "75"),
        make_recipe("3", "Bœuf bourguignon", "Plat", "21"),
        make_recipe("4", "Crème brûlée", "Dessert", "75"),
        make_recipe("5", "Quiche lorraine", "Plat", "57"),
        make_recipe("6", "Choucroute garnie", "Plat", "67"),
    ]


@pytest.fixture
def recipe_repo(recipes) -> FakeRecipeRepository:
    return FakeRecipeRepository(recipes)


@pytest.fixture
def like_repo() -> FakeLikeRepository:
    return FakeLikeRepository(
        [
            ("alice", "1"),
            ("bob", "1"),
            ("carol", "1"),
            ("bob", "5"),
            ("carol", "5"),
            ("dave", "3"),
        ]
    )


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def api_client(
    recipe_repo: FakeRecipeRepository, like_repo: FakeLikeRepository
) -> AsyncClient:
    """HTTP client with repositories replaced by in-memory fakes."""
    app.dependency_overrides[get_recipe_repo] = lambda: recipe_repo
    app.dependency_overrides[get_like_repo] = lambda: like_repo
    app.dependency_overrides[get_title_corpus] = lambda: FakeTitleCorpus(recipe_repo)
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
