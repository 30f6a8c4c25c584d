"""
Metric Ingest Service
Pulls series from provider adapters and stores them in the per-kind tables.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
import logging

from healthhub.core.config import settings
from healthhub.domain import DataPointSeries, MetricKind, UserId, to_utc
from healthhub.models import METRIC_MODELS
from healthhub.providers import DataProvider, ProviderCredentials, ProviderError, RateLimitError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Capped exponential backoff for retryable provider failures."""
    max_attempts: int = 4
    base_delay: float = 0.5
    max_delay: float = 30.0

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_attempts=settings.ingest.max_attempts,
            base_delay=settings.ingest.backoff_base_seconds,
            max_delay=settings.ingest.backoff_max_seconds,
        )

    def delay_for(self, attempt: int, error: Optional[ProviderError] = None) -> float:
        """Delay before the retry that follows failed attempt number ``attempt`` (1-based)."""
        delay = self.base_delay * (2 ** (attempt - 1))
        if isinstance(error, RateLimitError) and error.retry_after_seconds:
            delay = max(delay, error.retry_after_seconds)
        return min(delay, self.max_delay)


class MetricIngestService:
    """Service for syncing provider series into the database"""

    def __init__(
        self,
        db: AsyncSession,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.db = db
        self.retry_policy = retry_policy or RetryPolicy.from_settings()
        self._sleep = sleep

    async def fetch_with_retry(
        self,
        provider: DataProvider,
        user_id: UserId,
        kind: MetricKind,
        credentials: ProviderCredentials,
    ) -> DataPointSeries:
        """Fetch from the adapter, retrying timeouts, rate limits and transport errors."""
        attempt = 1
        while True:
            try:
                return await provider.fetch(user_id, kind, credentials)
            except ProviderError as e:
                if not e.retryable or attempt >= self.retry_policy.max_attempts:
                    logger.error(
                        f"Fetch of {kind.value} from {provider.provider_id()} failed "
                        f"after {attempt} attempt(s): {e}"
                    )
                    raise
                delay = self.retry_policy.delay_for(attempt, e)
                logger.warning(
                    f"{type(e).__name__} from {provider.provider_id()}, retrying in {delay:g}s "
                    f"(attempt {attempt}/{self.retry_policy.max_attempts})"
                )
                await self._sleep(delay)
                attempt += 1

    async def store_series(
        self,
        user_id: UserId,
        provider_id: str,
        series: DataPointSeries,
    ) -> Dict[str, int]:
        """
        Insert the series into its kind's table, skipping timestamps already stored
        for this user and provider.
        Returns: {'total_received', 'total_stored', 'duplicates_skipped'}
        """
        model = METRIC_MODELS[series.kind]
        logger.info(f"Storing {len(series.points)} {series.kind.value} points for user {user_id}")

        existing_timestamps = set()
        if series.points:
            existing_stmt = select(model.timestamp).where(
                model.user_id == str(user_id),
                model.provider == provider_id,
                model.timestamp.in_([point.timestamp for point in series.points])
            )
            result = await self.db.execute(existing_stmt)
            existing_timestamps = {to_utc(ts) for ts in result.scalars().all()}

        stored = 0
        skipped = 0
        for point in series.points:
            key = to_utc(point.timestamp)
            if key in existing_timestamps:
                skipped += 1
                continue
            # track within-batch duplicates
            existing_timestamps.add(key)

            self.db.add(model(
                user_id=str(user_id),
                provider=provider_id,
                timestamp=point.timestamp,
                value=point.value,
            ))
            stored += 1

        await self.db.commit()

        logger.info(f"{series.kind.value} sync complete: {stored} stored, {skipped} skipped")
        return {
            'total_received': len(series.points),
            'total_stored': stored,
            'duplicates_skipped': skipped
        }

    async def sync_metric(
        self,
        provider: DataProvider,
        user_id: UserId,
        kind: MetricKind,
        credentials: ProviderCredentials,
    ) -> Dict[str, int]:
        series = await self.fetch_with_retry(provider, user_id, kind, credentials)
        return await self.store_series(user_id, provider.provider_id(), series)

    async def sync_provider(
        self,
        provider: DataProvider,
        user_id: UserId,
        credentials: ProviderCredentials,
    ) -> Dict[str, Dict[str, Any]]:
        """Sync every kind the provider supports; a failed kind does not stop the others."""
        results: Dict[str, Dict[str, Any]] = {}
        for kind in sorted(provider.supported_metrics(), key=lambda k: k.value):
            try:
                results[kind.value] = await self.sync_metric(provider, user_id, kind, credentials)
            except ProviderError as e:
                results[kind.value] = {'error': type(e).__name__, 'message': e.message}
        return results

