# Central place for all configurable settings. We use Pydantic's
# BaseSettings so values can be read from env vars or a .env file.

import json

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def safe_json_loads(value):
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_json_loads=safe_json_loads,
    )

    # Core DB connection string, like sqlite:///./site_registry.db or a Postgres URL.
    DATABASE_URL: str = "sqlite:///./site_registry.db"

    # Toggle SQLAlchemy echo logs. Useful for debugging queries locally.
    DB_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # Applied when a create request leaves these fields out.
    DEFAULT_SITE_TYPE: str = "website"
    DEFAULT_SITE_TIMEZONE: str = "UTC"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value


# Any module can just `from site_registry.core.config import settings`.
settings = Settings()
