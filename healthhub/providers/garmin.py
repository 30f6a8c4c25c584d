from typing import FrozenSet

from healthhub.core.logger import get_logger
from healthhub.domain import DataPointSeries, MetricKind, UserId
from healthhub.providers.base import DataProvider
from healthhub.providers.credentials import PasswordCredentials, ProviderCredentials
from healthhub.providers.errors import AuthenticationError, ProviderNotImplementedError

logger = get_logger("garmin_provider")


class GarminProvider(DataProvider):
    """Garmin Connect adapter (username/password login)."""

    PROVIDER_ID = "garmin_connect"
    PROVIDER_NAME = "Garmin Connect"
    SUPPORTED = frozenset({MetricKind.HEART_RATE, MetricKind.WEIGHT})

    def provider_id(self) -> str:
        return self.PROVIDER_ID

    def provider_name(self) -> str:
        return self.PROVIDER_NAME

    def supported_metrics(self) -> FrozenSet[MetricKind]:
        return self.SUPPORTED

    async def _fetch_series(
        self,
        user_id: UserId,
        kind: MetricKind,
        credentials: ProviderCredentials,
    ) -> DataPointSeries:
        if not isinstance(credentials, PasswordCredentials):
            raise AuthenticationError(self.PROVIDER_ID, "Garmin Connect requires username/password credentials")

        logger.info(f"Garmin Connect fetch requested: user={user_id} kind={kind.value}")
        # TODO: call the Garmin Connect wellness API once an OAuth client is registered
        raise ProviderNotImplementedError(self.PROVIDER_ID, "Garmin Connect sync is not available yet")
