from datetime import datetime
from typing import List, Optional

from healthhub.core.logger import get_logger
from healthhub.database.metric_store import MetricStore
from healthhub.domain import MetricKind, UserId
from healthhub.providers import ProviderRegistry
from healthhub.schemas.metric_schemas import MetricInfoResponse, MetricSeriesResponse, ProviderInfoResponse

logger = get_logger("metric_controller")


class MetricController:
    """Controller for metric series reads and catalogues."""

    @staticmethod
    async def get_metric_series(
        store: MetricStore,
        kind: MetricKind,
        user_id: UserId,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> MetricSeriesResponse:
        """Fetch the user's series for an already resolved kind and serialize it."""
        logger.debug(f"Metric request: kind={kind.value} user={user_id} from={start} to={end}")

        series = await store.fetch(kind, user_id, start, end)
        return MetricSeriesResponse.from_series(series)

    @staticmethod
    def list_metrics() -> List[MetricInfoResponse]:
        return [MetricInfoResponse.from_kind(kind) for kind in MetricKind]

    @staticmethod
    def list_providers(registry: ProviderRegistry) -> List[ProviderInfoResponse]:
        return [
            ProviderInfoResponse(
                provider_id=provider.provider_id(),
                provider_name=provider.provider_name(),
                supported_metrics=sorted(kind.value for kind in provider.supported_metrics())
            )
            for provider in registry.all()
        ]
