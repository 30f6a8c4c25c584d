from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from healthhub.api.v1.controllers.metric_controller import MetricController
from healthhub.api.v1.dependencies import get_current_user_id, get_metric_kind, get_metric_store
from healthhub.database.metric_store import MetricStore
from healthhub.domain import MetricKind, UserId
from healthhub.schemas.metric_schemas import MetricInfoResponse, MetricSeriesResponse

router = APIRouter(tags=["Metrics"])


@router.get("/metric/{metric_name}", response_model=MetricSeriesResponse)
async def get_metric_series(
    kind: MetricKind = Depends(get_metric_kind),
    user_id: UserId = Depends(get_current_user_id),
    store: MetricStore = Depends(get_metric_store),
    start: Optional[datetime] = Query(None, alias="from", description="Inclusive lower bound (RFC 3339)"),
    end: Optional[datetime] = Query(None, alias="to", description="Inclusive upper bound (RFC 3339)")
):
    """
    Get one user's time series for a metric.

    Points are ordered by timestamp ascending; timestamps are Unix seconds (UTC)
    and the unit symbol is attached to the series.
    """
    return await MetricController.get_metric_series(store, kind, user_id, start, end)


@router.get("/metrics", response_model=List[MetricInfoResponse])
async def list_metrics():
    """List the supported metric kinds with their display names and units."""
    return MetricController.list_metrics()
