import logging
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "CMS Admin Dashboard"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Remote CMS API
    api_base_url: str = "https://api.smartcorpweb.com/api"
    api_token: str = ""
    api_timeout_seconds: float = 15.0
    stats_endpoint: str = "/stats/admin/{org_code}"

    # Session & tenant
    session_secret_key: str = "change-me-in-production"
    default_org_code: str = ""

    # Dashboard
    resource_catalog_dir: str = "data/resources"   # relative to backend directory
    dashboard_prefix: str = "/dashboard"

    # Logging levels per category (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # root logger
    log_level_http: str = "WARNING"          # httpx / httpcore
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_gateway: str = "INFO"          # CMS API call tracing

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @field_validator("dashboard_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    @property
    def catalog_path(self) -> Path:
        """Catalog directory, resolved against the backend directory when relative."""
        path = Path(self.resource_catalog_dir)
        if not path.is_absolute():
            path = _BACKEND_DIR / path
        return path

    def model_post_init(self, __context: object) -> None:
        if self.session_secret_key == "change-me-in-production" and self.app_env == "production":
            _config_logger.warning("SESSION_SECRET_KEY is not configured; sessions are forgeable.")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
