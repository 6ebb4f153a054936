"""Client configuration (settings and environment).

Single source of truth for docsearch configuration. Uses pydantic-settings
with .env support; every key can be set through a DOCSEARCH_-prefixed
environment variable (e.g. DOCSEARCH_BASE_URL).
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment and .env.

    base_url is required; everything else has a default.
    """

    # Connection
    base_url: str = ""
    request_timeout_seconds: float = 30.0

    # Error-body markers that identify a child document fetched without its routing key.
    # Older services report the exception class name, newer ones the snake_case type.
    routing_missing_markers: list[str] = [
        "RoutingMissingException",
        "routing_missing_exception",
    ]

    # Logging
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DOCSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Store the base URL without trailing slashes so paths join cleanly."""
        return value.strip().rstrip("/")

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required settings.

        - DOCSEARCH_BASE_URL must be set and use http or https.
        - At least one routing-missing marker must be configured.
        """
        if not self.base_url:
            raise ValueError(
                "DOCSEARCH_BASE_URL is required (e.g. https://es.local:9200). "
                "Set in environment or .env file."
            )
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(
                f"DOCSEARCH_BASE_URL must start with http:// or https://, got: {self.base_url!r}"
            )
        if not [m for m in self.routing_missing_markers if m]:
            raise ValueError("DOCSEARCH_ROUTING_MISSING_MARKERS must not be empty")
        if self.request_timeout_seconds <= 0:
            raise ValueError("DOCSEARCH_REQUEST_TIMEOUT_SECONDS must be positive")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached client settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
