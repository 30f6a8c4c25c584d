"""
Provider adapters and the registry that holds them.
"""

from typing import Dict, List

from healthhub.exceptions.errors import UnknownProviderError

from .base import DataProvider
from .credentials import ApiKeyCredentials, OAuthTokenCredentials, PasswordCredentials, ProviderCredentials
from .errors import (
    AuthenticationError,
    AuthorizationError,
    ProviderDecodeError,
    ProviderError,
    ProviderNotImplementedError,
    ProviderTimeoutError,
    RateLimitError,
    TransportError,
)
from .garmin import GarminProvider


class ProviderRegistry:
    """Adapters keyed by their globally unique provider id."""

    def __init__(self):
        self._providers: Dict[str, DataProvider] = {}

    def register(self, provider: DataProvider) -> DataProvider:
        provider_id = provider.provider_id()
        if provider_id in self._providers:
            raise ValueError(f"Provider id already registered: {provider_id}")
        self._providers[provider_id] = provider
        return provider

    def get(self, provider_id: str) -> DataProvider:
        try:
            return self._providers[provider_id]
        except KeyError:
            raise UnknownProviderError(provider_id)

    def all(self) -> List[DataProvider]:
        return sorted(self._providers.values(), key=lambda p: p.provider_id())

    def __contains__(self, provider_id: str) -> bool:
        return provider_id in self._providers


provider_registry = ProviderRegistry()
provider_registry.register(GarminProvider())

__all__ = [
    "DataProvider",
    "ProviderRegistry",
    "provider_registry",
    "GarminProvider",
    "ProviderCredentials",
    "PasswordCredentials",
    "OAuthTokenCredentials",
    "ApiKeyCredentials",
    "ProviderError",
    "ProviderNotImplementedError",
    "ProviderTimeoutError",
    "AuthenticationError",
    "AuthorizationError",
    "RateLimitError",
    "TransportError",
    "ProviderDecodeError",
]
