"""Process-wide Firestore client, created in the app lifespan.

Connection modes, first match wins:
1. FIRESTORE_EMULATOR_HOST (+ FIREBASE_PROJECT_ID): local emulator, no credentials.
2. FIREBASE_SERVICE_ACCOUNT_KEY: service account JSON in the environment (Vercel).
3. FIREBASE_SERVICE_ACCOUNT_PATH: service account JSON file.
Without any of them the app still starts and recipe endpoints answer 503.
"""

import json
import logging
from pathlib import Path

from cuisine.core.config import Settings, get_settings
from cuisine.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)

_firestore_client: FirestoreRESTClient | None = None


def _read_service_account(settings: Settings) -> dict | None:
    """Return the service account JSON from env key or file, None if unset.

    Raises:
        ValueError: the key is not valid JSON or the file is missing.
    """
    if settings.firebase_service_account_key:
        raw = settings.firebase_service_account_key.get_secret_value()
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    if settings.firebase_service_account_path:
        path = Path(settings.firebase_service_account_path).expanduser().resolve()
        if not path.is_file():
            raise ValueError(f"FIREBASE_SERVICE_ACCOUNT_PATH not found: {path}")
        return json.loads(path.read_text(encoding="utf-8"))
    return None


def build_firestore_client(settings: Settings) -> FirestoreRESTClient | None:
    """Create a client for the configured database, None when not configured.

    Raises:
        ValueError: configuration is present but unusable.
    """
    if settings.firestore_emulator_host:
        if not settings.firebase_project_id:
            raise ValueError("FIRESTORE_EMULATOR_HOST requires FIREBASE_PROJECT_ID")
        logger.info("Using Firestore emulator at %s", settings.firestore_emulator_host)
        return FirestoreRESTClient(
            settings.firebase_project_id,
            None,
            database=settings.firestore_database,
            base_url=f"http://{settings.firestore_emulator_host}/v1",
        )

    key_dict = _read_service_account(settings)
    if key_dict is None:
        return None
    project_id = settings.firebase_project_id or key_dict.get("project_id")
    if not project_id:
        raise ValueError("Service account JSON has no 'project_id' (set FIREBASE_PROJECT_ID)")
    return FirestoreRESTClient(
        project_id,
        _get_credentials(key_dict),
        database=settings.firestore_database,
    )


def init_firebase() -> bool:
    """Create the shared Firestore client once; True when it is available.

    Misconfiguration is logged, not raised, so the app can start without a
    recipe store.
    """
    global _firestore_client
    if _firestore_client is not None:
        return True
    try:
        _firestore_client = build_firestore_client(get_settings())
    except Exception:
        logger.exception("Firestore initialization failed")
        return False
    if _firestore_client is None:
        return False
    logger.info(
        "Firestore client initialized for project %s (database %s)",
        _firestore_client.project_id,
        get_settings().firestore_database,
    )
    return True


def get_firestore_client() -> FirestoreRESTClient | None:
    """Return the shared Firestore client, or None if not configured."""
    return _firestore_client


async def close_firebase() -> None:
    """Close the shared client's HTTP connection pool. Call from app shutdown."""
    global _firestore_client
    if _firestore_client is not None:
        await _firestore_client.aclose()
        _firestore_client = None
        logger.info("Firestore HTTP client closed")
