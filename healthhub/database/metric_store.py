"""
Read side of the metric store: one typed fetch per metric kind.
"""

import asyncio
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import Float, Integer, String
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    ProgrammingError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.types import TypeEngine

from healthhub.core.config import settings
from healthhub.core.logger import get_logger
from healthhub.database.query_composer import QueryComposer
from healthhub.domain import DataPoint, DataPointSeries, MetricKind, UserId, to_utc
from healthhub.exceptions.errors import (
    DecodeRangeError,
    InvalidRangeError,
    StoreTimeoutError,
    StoreUnavailableError,
)

logger = get_logger("metric_store")

# Column types used to read ``value``; enum-backed columns are read as text and
# checked by the kind's decoder.
_VALUE_READ_TYPES: Dict[MetricKind, TypeEngine] = {
    MetricKind.HEART_RATE: Integer(),
    MetricKind.WEIGHT: Float(),
    MetricKind.HYDRATION: Float(),
    MetricKind.VO2_MAX: Float(),
    MetricKind.SLEEP_DURATION: Integer(),
    MetricKind.SLEEP_STAGE: String(),
}

# Faults in the statement itself stay unhandled; any other driver error means the
# store cannot serve the read.
_STATEMENT_ERRORS = (ProgrammingError, DataError, IntegrityError)
_TRANSPORT_ERRORS = (DBAPIError, PoolTimeoutError, ConnectionError, OSError)


class MetricStore:
    """Typed, per-user reads over the per-kind metric tables."""

    def __init__(self, db: AsyncSession, timeout: Optional[float] = None):
        self.db = db
        self.timeout = timeout if timeout is not None else settings.store.fetch_timeout_seconds
        self._composers = {
            kind: QueryComposer(f"SELECT value, timestamp FROM {kind.table_name}")
            for kind in MetricKind
        }

    async def fetch_heart_rate(self, user_id: UserId, start: Optional[datetime] = None,
                               end: Optional[datetime] = None, timeout: Optional[float] = None) -> DataPointSeries:
        return await self._fetch_data_points(MetricKind.HEART_RATE, user_id, start, end, timeout)

    async def fetch_weight(self, user_id: UserId, start: Optional[datetime] = None,
                           end: Optional[datetime] = None, timeout: Optional[float] = None) -> DataPointSeries:
        return await self._fetch_data_points(MetricKind.WEIGHT, user_id, start, end, timeout)

    async def fetch_hydration(self, user_id: UserId, start: Optional[datetime] = None,
                              end: Optional[datetime] = None, timeout: Optional[float] = None) -> DataPointSeries:
        return await self._fetch_data_points(MetricKind.HYDRATION, user_id, start, end, timeout)

    async def fetch_vo2_max(self, user_id: UserId, start: Optional[datetime] = None,
                            end: Optional[datetime] = None, timeout: Optional[float] = None) -> DataPointSeries:
        return await self._fetch_data_points(MetricKind.VO2_MAX, user_id, start, end, timeout)

    async def fetch_sleep_duration(self, user_id: UserId, start: Optional[datetime] = None,
                                   end: Optional[datetime] = None, timeout: Optional[float] = None) -> DataPointSeries:
        return await self._fetch_data_points(MetricKind.SLEEP_DURATION, user_id, start, end, timeout)

    async def fetch_sleep_stage(self, user_id: UserId, start: Optional[datetime] = None,
                                end: Optional[datetime] = None, timeout: Optional[float] = None) -> DataPointSeries:
        return await self._fetch_data_points(MetricKind.SLEEP_STAGE, user_id, start, end, timeout)

    async def fetch(self, kind: MetricKind, user_id: UserId, start: Optional[datetime] = None,
                    end: Optional[datetime] = None, timeout: Optional[float] = None) -> DataPointSeries:
        """Dispatch to the typed fetch for ``kind``."""
        fetchers = {
            MetricKind.HEART_RATE: self.fetch_heart_rate,
            MetricKind.WEIGHT: self.fetch_weight,
            MetricKind.HYDRATION: self.fetch_hydration,
            MetricKind.VO2_MAX: self.fetch_vo2_max,
            MetricKind.SLEEP_DURATION: self.fetch_sleep_duration,
            MetricKind.SLEEP_STAGE: self.fetch_sleep_stage,
        }
        return await fetchers[kind](user_id, start, end, timeout)

    async def _fetch_data_points(
        self,
        kind: MetricKind,
        user_id: UserId,
        start: Optional[datetime],
        end: Optional[datetime],
        timeout: Optional[float],
    ) -> DataPointSeries:
        start = to_utc(start) if start is not None else None
        end = to_utc(end) if end is not None else None
        if start is not None and end is not None and start > end:
            raise InvalidRangeError(start, end)

        deadline = timeout if timeout is not None else self.timeout
        try:
            points = await asyncio.wait_for(self._load_points(kind, user_id, start, end), deadline)
        except asyncio.TimeoutError as e:
            logger.error(f"Fetch of {kind.value} for user {user_id} exceeded {deadline}s")
            raise StoreTimeoutError(kind.value, deadline) from e
        except DecodeRangeError as e:
            logger.error(f"Failed to decode {kind.value} row for user {user_id}: value={e.raw_value!r} ({e.reason})")
            raise
        except _STATEMENT_ERRORS as e:
            logger.error(f"Query for {kind.value} failed: {repr(e)}")
            raise
        except _TRANSPORT_ERRORS as e:
            logger.error(f"Store unavailable while fetching {kind.value}: {repr(e)}")
            raise StoreUnavailableError(kind.value) from e

        logger.debug(f"Fetched {len(points)} {kind.value} points for user {user_id}")
        return DataPointSeries(kind=kind, points=tuple(points))

    async def _load_points(
        self,
        kind: MetricKind,
        user_id: UserId,
        start: Optional[datetime],
        end: Optional[datetime],
    ) -> List[DataPoint]:
        query = self._composers[kind].compose(str(user_id), start, end)
        result = await self.db.execute(query.statement(_VALUE_READ_TYPES[kind]))

        points = []
        for row in result.mappings():
            value = kind.decode(row["value"])
            timestamp = row["timestamp"]
            if not isinstance(timestamp, datetime):
                raise DecodeRangeError(kind.value, timestamp, "timestamp column is not a datetime")
            points.append(DataPoint(kind=kind, value=value, timestamp=timestamp))
        return points
