"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Search tuning values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Firestore credentials are optional: without them the app starts and
    recipe endpoints answer 503 until FIREBASE_SERVICE_ACCOUNT_KEY,
    FIREBASE_SERVICE_ACCOUNT_PATH or FIRESTORE_EMULATOR_HOST is provided.
    """

    # App
    app_name: str = "cuisine-artisanale"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Firebase / Firestore: use key (env) or path (file). For Vercel, use key.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    firebase_project_id: str | None = None  # Overrides the key's project_id; required for the emulator
    firestore_database: str = "(default)"
    firestore_emulator_host: str | None = None  # e.g. localhost:8080; no credentials needed
    recipes_collection: str = "recipes"
    likes_collection: str = "likes"

    # Redis Cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_ttl_title_corpus: int = 300
    cache_ttl_like_counts: int = 120

    # OpenTelemetry
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    # Search tuning
    search_similarity_threshold: float = 0.5
    search_containment_bonus: float = 1.0
    search_prefix_bonus: float = 0.8
    search_max_correction_distance: int = 2
    search_keyword_overfetch: int = 4
    search_fallback_overfetch: int = 3
    search_default_page_size: int = 12
    search_max_page_size: int = 50
    search_title_corpus_limit: int = 1000

    # Recommendations
    recommend_type_weight: float = 2.0
    recommend_region_weight: float = 1.0
    recommend_like_weight: float = 0.5

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_search_tuning(self) -> "Settings":
        """Reject search tuning values that would make ranking meaningless."""
        if not 0.0 <= self.search_similarity_threshold <= 1.0:
            raise ValueError(
                "SEARCH_SIMILARITY_THRESHOLD must be between 0 and 1, "
                f"got: {self.search_similarity_threshold}"
            )
        for name in ("search_containment_bonus", "search_prefix_bonus"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name.upper()} must be between 0 and 1, got: {value}")
        if self.search_max_correction_distance < 0:
            raise ValueError("SEARCH_MAX_CORRECTION_DISTANCE must be >= 0")
        if self.search_keyword_overfetch < 1 or self.search_fallback_overfetch < 1:
            raise ValueError("Search over-fetch multipliers must be >= 1")
        if not 1 <= self.search_default_page_size <= self.search_max_page_size:
            raise ValueError(
                "SEARCH_DEFAULT_PAGE_SIZE must be between 1 and SEARCH_MAX_PAGE_SIZE "
                f"({self.search_max_page_size}), got: {self.search_default_page_size}"
            )
        if self.search_title_corpus_limit < 1:
            raise ValueError("SEARCH_TITLE_CORPUS_LIMIT must be >= 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
