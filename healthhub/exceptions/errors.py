from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse


class ApplicationException(Exception):
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_response(self):
        return JSONResponse(
            status_code=self.status_code,
            content={"error": self.message}
        )


class UnknownMetricError(ApplicationException):
    def __init__(self, metric_name: str):
        super().__init__(f"Unknown metric: {metric_name}", status.HTTP_404_NOT_FOUND)
        self.metric_name = metric_name


class UnknownProviderError(ApplicationException):
    def __init__(self, provider_id: str):
        super().__init__(f"Unknown provider: {provider_id}", status.HTTP_404_NOT_FOUND)
        self.provider_id = provider_id


class InvalidUserIdError(ApplicationException):
    def __init__(self, message: str = "A valid X-User-Id header is required"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class InvalidRangeError(ApplicationException):
    def __init__(self, start, end):
        super().__init__(
            f"Invalid time range: 'from' ({start.isoformat()}) is after 'to' ({end.isoformat()})",
            status.HTTP_400_BAD_REQUEST
        )
        self.start = start
        self.end = end


class DecodeRangeError(ApplicationException):
    """A stored row violates the value constraints of its metric kind.

    The raw value is kept for logging only; the client message names the kind.
    """

    def __init__(self, kind: str, raw_value: Any, reason: str = ""):
        super().__init__(
            f"Stored {kind} data could not be decoded",
            status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        self.kind = kind
        self.raw_value = raw_value
        self.reason = reason


class StoreUnavailableError(ApplicationException):
    def __init__(self, kind: str, message: str = ""):
        super().__init__(
            message or f"Metric store unavailable while reading {kind}",
            status.HTTP_503_SERVICE_UNAVAILABLE
        )
        self.kind = kind


class StoreTimeoutError(StoreUnavailableError):
    def __init__(self, kind: str, timeout: float):
        super().__init__(kind, f"Metric store timed out after {timeout:g}s while reading {kind}")
        self.timeout = timeout
