"""Client configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Catalog and identity/store credentials are validated
at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment and .env.

    TMDB_API_KEY, FIREBASE_API_KEY and FIREBASE_PROJECT_ID are required;
    everything else has a default.
    """

    # App
    app_name: str = "movie-watchlist"
    app_version: str = "1.0.0"
    debug: bool = False

    # Catalog (TMDB)
    tmdb_api_key: SecretStr = SecretStr("")
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_image_base_url: str = "https://image.tmdb.org/t/p"
    tmdb_language: str = "en-US"

    # Identity + document store (Firebase project)
    firebase_api_key: SecretStr = SecretStr("")
    firebase_project_id: str = ""
    # Verify ID tokens returned by the identity service (google-auth, fetches Google certs).
    firebase_verify_id_tokens: bool = True

    # Live list listener: seconds between store polls (local writes refresh immediately).
    store_poll_interval_seconds: float = 5.0

    # Outbound HTTP
    http_timeout_seconds: float = 30.0

    # CORS for the local view server
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required credentials and sane intervals."""
        if not self.tmdb_api_key.get_secret_value():
            raise ValueError(
                "TMDB_API_KEY is required. Create one under TMDB account settings → API "
                "and set it in the environment or .env file."
            )
        if not self.firebase_api_key.get_secret_value():
            raise ValueError(
                "FIREBASE_API_KEY is required (Firebase console → Project settings → Web API key)."
            )
        if not self.firebase_project_id:
            raise ValueError(
                "FIREBASE_PROJECT_ID is required (Firebase console → Project settings → Project ID)."
            )
        if self.store_poll_interval_seconds <= 0:
            raise ValueError("STORE_POLL_INTERVAL_SECONDS must be greater than 0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
