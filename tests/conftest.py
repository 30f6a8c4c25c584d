"""Shared test fixtures for HealthHub tests."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Tuple

# ---------------------------------------------------------------------------
# Test hermeticity: settings are loaded at import time
# ---------------------------------------------------------------------------

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
os.environ.setdefault("HEALTHHUB_CONFIG_DIR", str(_PROJECT_ROOT / "config"))
os.environ.setdefault("LOG_TO_FILE", "false")

import cuid  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import DateTime, Text, bindparam, text  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from healthhub.database.base import Base  # noqa: E402
from healthhub.database.connection import get_db  # noqa: E402
from healthhub.domain import MetricKind, UserId, to_utc  # noqa: E402
from healthhub.main import app  # noqa: E402
from healthhub.models import METRIC_MODELS  # noqa: E402

USER_ID = UserId.parse("550e8400-e29b-41d4-a716-446655440000")
OTHER_USER_ID = UserId.parse("7c9e6679-7425-40de-944b-e07fc1f90ae7")


def utc(text_value: str) -> datetime:
    """Parse an RFC 3339 literal such as ``2024-01-01T00:00:00Z``."""
    return to_utc(datetime.fromisoformat(text_value.replace("Z", "+00:00")))


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def add_rows(session_factory):
    """Insert ``(value, timestamp)`` rows for a kind through the ORM models."""

    async def _add(
        kind: MetricKind,
        rows: Iterable[Tuple[Any, datetime]],
        user_id: UserId = USER_ID,
        provider: str = "manual",
    ) -> None:
        model = METRIC_MODELS[kind]
        async with session_factory() as session:
            session.add_all([
                model(user_id=str(user_id), provider=provider, value=value, timestamp=to_utc(ts))
                for value, ts in rows
            ])
            await session.commit()

    return _add


@pytest.fixture
def add_raw_row(session_factory):
    """Insert a row bypassing ORM type handling, e.g. a legacy out-of-range value."""

    async def _add(kind: MetricKind, value: Any, ts: datetime, user_id: UserId = USER_ID) -> None:
        stmt = text(
            f"INSERT INTO {kind.table_name} (id, user_id, provider, timestamp, value) "
            "VALUES (:id, :user_id, 'manual', :ts, :value)"
        ).bindparams(
            bindparam("user_id", type_=Text()),
            bindparam("ts", type_=DateTime(timezone=True)),
        )
        async with session_factory() as session:
            await session.execute(stmt, {
                "id": cuid.cuid(),
                "user_id": str(user_id),
                "ts": to_utc(ts),
                "value": value,
            })
            await session.commit()

    return _add


@pytest_asyncio.fixture
async def client(session_factory):
    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()
