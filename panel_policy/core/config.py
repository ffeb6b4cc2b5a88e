"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from panel_policy.core.constants import (
    ACTIVITY_LOG_CHANNELS,
    DEFAULT_SENSITIVE_FIELDS,
    SUPER_ADMIN_ROLE,
)


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    Everything has a default; database_url is only required by the
    persistence adapters (see database._ensure_engine).
    """

    # App
    app_name: str = "panel-policy"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (postgres via SQLAlchemy async + Alembic)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Redis permission cache
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_ttl_permissions: int = 300

    # Authorization
    super_admin_role: str = SUPER_ADMIN_ROLE

    # Activity log
    activity_log_enabled: bool = True
    activity_log_only_dirty: bool = True
    activity_log_submit_empty: bool = False
    # Resource types whose "Resource" channel entries are skipped (the user
    # resource logs through the "Model" channel instead).
    activity_log_excluded_resources: list[str] = ["user"]
    activity_log_sensitive_fields: list[str] = list(DEFAULT_SENSITIVE_FIELDS)
    activity_log_channels: list[str] = list(ACTIVITY_LOG_CHANNELS)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("cache_ttl_permissions")
    @classmethod
    def validate_ttl(cls, value: int) -> int:
        """Cache TTL must be positive (Redis SETEX rejects 0)."""
        if value <= 0:
            raise ValueError("cache_ttl_permissions must be a positive number of seconds")
        return value

    @model_validator(mode="after")
    def validate_channels(self) -> "Settings":
        """Reject unknown activity log channel names."""
        unknown = [c for c in self.activity_log_channels if c not in ACTIVITY_LOG_CHANNELS]
        if unknown:
            raise ValueError(
                f"Unknown activity_log_channels {unknown!r}. "
                f"Must be drawn from: {', '.join(ACTIVITY_LOG_CHANNELS)}"
            )
        if not self.super_admin_role.strip():
            raise ValueError("super_admin_role must be a non-empty role code")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() picks up the new values.
    """
    return Settings()
