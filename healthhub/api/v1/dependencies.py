from typing import Optional

from fastapi import Depends, Header, Path
from sqlalchemy.ext.asyncio import AsyncSession

from healthhub.database.connection import get_db
from healthhub.database.metric_store import MetricStore
from healthhub.domain import MetricKind, UserId
from healthhub.providers import ProviderRegistry, provider_registry


def get_metric_kind(
    metric_name: str = Path(..., description="heart_rate, weight, hydration, vo2_max, sleep_duration or sleep_stage")
) -> MetricKind:
    """Resolved ahead of the other request dependencies so an unknown name is always a 404."""
    return MetricKind.from_name(metric_name)


async def get_metric_store(db: AsyncSession = Depends(get_db)) -> MetricStore:
    return MetricStore(db)


async def get_current_user_id(
    x_user_id: Optional[str] = Header(None, description="Caller's user id (UUID)")
) -> UserId:
    """User id is resolved upstream of this service and passed through as a header."""
    return UserId.parse(x_user_id)


def get_provider_registry() -> ProviderRegistry:
    return provider_registry
