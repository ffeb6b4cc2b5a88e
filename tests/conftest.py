"""Pytest configuration and fixtures for panel_policy.

Unit tests use in-memory fakes for the cache, permission resolver and
activity log repository. DB-dependent fixtures skip unless DATABASE_URL
points at Postgres.
"""

from __future__ import annotations

import fnmatch
from datetime import datetime, timezone
from typing import Any

import pytest

from panel_policy.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogResult,
)
from panel_policy.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only (no .env)."""
    return Settings(_env_file=None)


class FakeCache:
    """Dict-backed stand-in for CacheService."""

    def __init__(self, available: bool = True) -> None:
        self.store: dict[str, Any] = {}
        self.available = available
        self.set_calls: list[tuple[str, Any, int]] = []

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any:
        return self.store.get(key)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.set_calls.append((key, value, ttl))
        self.store[key] = value
        return True

    async def delete(self, key: str) -> bool:
        self.store.pop(key, None)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        matched = [k for k in self.store if fnmatch.fnmatchcase(k, pattern)]
        for k in matched:
            del self.store[k]
        return len(matched)


class FakePermissionResolver:
    """Resolver returning fixed permission sets keyed by (tenant_id, user_id)."""

    def __init__(self, grants: dict[tuple[str, str], set[str]] | None = None) -> None:
        self.grants = grants or {}
        self.calls = 0

    async def get_user_permissions(self, user_id: str, tenant_id: str) -> set[str]:
        self.calls += 1
        return set(self.grants.get((tenant_id, user_id), set()))


class FakeActivityLogRepository:
    """Append-only list standing in for ActivityLogRepository."""

    def __init__(self) -> None:
        self.entries: list[ActivityLogResult] = []

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogResult:
        result = ActivityLogResult(
            id=f"log-{len(self.entries) + 1}",
            tenant_id=entry.tenant_id,
            log_name=entry.log_name,
            description=entry.description,
            event=entry.event,
            subject_type=entry.subject_type,
            subject_id=entry.subject_id,
            causer_id=entry.causer_id,
            properties=entry.properties,
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
        self.entries.append(result)
        return result

    async def list(self, tenant_id: str, **filters: Any) -> list[ActivityLogResult]:
        self.last_filters = filters
        rows = [e for e in self.entries if e.tenant_id == tenant_id]
        return list(reversed(rows))


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def make_cache():
    """Factory for FakeCache (e.g. make_cache(available=False))."""
    return FakeCache


@pytest.fixture
def make_resolver():
    """Factory for FakePermissionResolver({(tenant_id, user_id): {...}})."""
    return FakePermissionResolver


@pytest.fixture
def activity_repo() -> FakeActivityLogRepository:
    return FakeActivityLogRepository()


@pytest.fixture
async def db_session():
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL (postgresql+asyncpg://...) with migrations applied
    (alembic upgrade head). Skips otherwise.
    """
    from panel_policy.infrastructure.persistence import database

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.get_db() as session:
        yield session
        await session.rollback()
    await database.dispose_engine()
