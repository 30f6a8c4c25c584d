"""Provider adapter contract.

An adapter identifies itself, advertises the metric kinds it can produce and
fetches a typed series for one user and one kind.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet

from healthhub.domain import DataPointSeries, MetricKind, UserId
from healthhub.providers.credentials import ProviderCredentials
from healthhub.providers.errors import ProviderDecodeError, ProviderNotImplementedError


class DataProvider(ABC):
    """Base class for external health data sources.

    Subclasses implement ``_fetch_series``; ``fetch`` guards the contract:
    unsupported kinds fail with ``ProviderNotImplementedError`` before any
    upstream call, and a series of the wrong kind is a decode failure.
    """

    @abstractmethod
    def provider_id(self) -> str:
        """Stable machine identifier, e.g. ``garmin_connect``."""

    @abstractmethod
    def provider_name(self) -> str:
        """Human-readable label."""

    @abstractmethod
    def supported_metrics(self) -> FrozenSet[MetricKind]:
        ...

    async def fetch(
        self,
        user_id: UserId,
        kind: MetricKind,
        credentials: ProviderCredentials,
    ) -> DataPointSeries:
        if kind not in self.supported_metrics():
            raise ProviderNotImplementedError(
                self.provider_id(), f"{kind.value} is not supported by {self.provider_name()}"
            )

        series = await self._fetch_series(user_id, kind, credentials)
        if series.kind != kind:
            raise ProviderDecodeError(
                self.provider_id(), f"requested {kind.value} but received {series.kind.value}"
            )
        return series

    @abstractmethod
    async def _fetch_series(
        self,
        user_id: UserId,
        kind: MetricKind,
        credentials: ProviderCredentials,
    ) -> DataPointSeries:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.provider_id()}>"
