"""Recompute titleKeywords and url for every recipe.

Usage:
    uv run python -m scripts.backfill_recipe_keywords [--dry-run]
Walks the recipe collection in title order, writes the keyword index and
URL slug where they differ, then drops cached title corpora.
Requires FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH.
"""

import asyncio
import sys

from cuisine.application.services.text_matching import build_title_keywords, slugify
from cuisine.core.config import get_settings
from cuisine.core.constants import FIELD_TITLE
from cuisine.domain.value_objects.search import SCOPE_BROWSE, PageCursor
from cuisine.infrastructure.cache.keys import title_corpus_pattern
from cuisine.infrastructure.cache.redis_cache import CacheService
from cuisine.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)
from cuisine.infrastructure.firebase.repositories import FirestoreRecipeRepository
from cuisine.shared.telemetry.logging import setup_logging

BATCH_SIZE = 200


async def main() -> None:
    """Update search fields of every recipe whose index is stale."""
    setup_logging()
    settings = get_settings()
    dry_run = "--dry-run" in sys.argv[1:]
    if not init_firebase():
        print("Firestore not configured", file=sys.stderr)
        sys.exit(1)
    client = get_firestore_client()
    assert client is not None
    repo = FirestoreRecipeRepository(client, settings.recipes_collection)

    scanned = 0
    updated = 0
    cursor: PageCursor | None = None
    try:
        while True:
            batch = await repo.get_all(FIELD_TITLE, BATCH_SIZE, cursor)
            if not batch:
                break
            for item in batch:
                scanned += 1
                keywords = build_title_keywords(item.title)
                url = slugify(item.title)
                if list(item.keywords) == keywords and item.url == url:
                    continue
                updated += 1
                if dry_run:
                    print(f"Would update {item.id}: {item.title!r} -> {url}")
                    continue
                await repo.update_search_fields(item.id, keywords, url)
            if len(batch) < BATCH_SIZE:
                break
            cursor = PageCursor.from_item(batch[-1], SCOPE_BROWSE)
    finally:
        await close_firebase()

    if updated and not dry_run and settings.redis_enabled:
        cache = CacheService()
        await cache.connect()
        await cache.delete_pattern(title_corpus_pattern(settings.recipes_collection))
        await cache.disconnect()

    verb = "would update" if dry_run else "updated"
    print(f"Done. Scanned {scanned} recipe(s), {verb} {updated}.")


if __name__ == "__main__":
    asyncio.run(main())
