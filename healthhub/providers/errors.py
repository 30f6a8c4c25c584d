from typing import Optional


class ProviderError(Exception):
    """Base for failures raised by provider adapters on the ingest path."""

    retryable = False

    def __init__(self, provider_id: str, message: str):
        super().__init__(f"[{provider_id}] {message}")
        self.provider_id = provider_id
        self.message = message


class ProviderNotImplementedError(ProviderError):
    pass


class ProviderTimeoutError(ProviderError):
    retryable = True


class AuthenticationError(ProviderError):
    """Credentials were rejected upstream."""


class AuthorizationError(ProviderError):
    """Credentials are valid but lack the required scope."""


class RateLimitError(ProviderError):
    retryable = True

    def __init__(self, provider_id: str, message: str, retry_after_seconds: Optional[float] = None):
        super().__init__(provider_id, message)
        self.retry_after_seconds = retry_after_seconds


class TransportError(ProviderError):
    retryable = True


class ProviderDecodeError(ProviderError):
    """Upstream payload could not be turned into a series."""
