import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_BACKENDS = frozenset({"memory", "sql", "mongo"})
_SLUG_POLICIES = frozenset({"reject", "suffix"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Newsdesk API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Storage backend: memory | sql | mongo
    storage_backend: str = "memory"
    database_url: str = "sqlite:///./newsdesk.db"
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "newsdesk"
    mongodb_timeout_ms: int = 3000
    # Use the in-memory store when the configured backend is unreachable at startup
    fallback_to_memory: bool = True
    seed_sample_data: bool = True

    # Content rules
    slug_collision_policy: str = "reject"    # reject | suffix
    todays_views_placeholder: int = 0

    # Image uploads
    upload_dir: str = "uploads"
    max_image_size_mb: int = 5

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL queries
    log_level_mongo: str = "WARNING"         # pymongo driver
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_repository: str = "INFO"       # storage backends and providers

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Normalise the backend name and slug policy, falling back to defaults for unknown values."""
        backend = self.storage_backend.strip().lower()
        if backend not in _BACKENDS:
            _config_logger.warning(
                "Unknown STORAGE_BACKEND '%s'; using 'memory'", self.storage_backend
            )
            backend = "memory"
        object.__setattr__(self, "storage_backend", backend)

        policy = self.slug_collision_policy.strip().lower()
        if policy not in _SLUG_POLICIES:
            _config_logger.warning(
                "Unknown SLUG_COLLISION_POLICY '%s'; using 'reject'", self.slug_collision_policy
            )
            policy = "reject"
        object.__setattr__(self, "slug_collision_policy", policy)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()
