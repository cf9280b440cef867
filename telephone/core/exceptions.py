"""Custom exception classes for structured error handling."""

from enum import Enum
from typing import Any


class TelephoneError(Exception):
    """Base exception for all translation telephone errors."""

    def __init__(self, code: str, message: str, status_code: int = 500) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(TelephoneError):
    """Request shape is wrong. Raised before any provider call."""

    def __init__(self, message: str = "Invalid request") -> None:
        super().__init__(code="VALIDATION_ERROR", message=message, status_code=400)


class ProviderErrorKind(str, Enum):
    """Why a call to the translation provider failed."""

    NETWORK = "network"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    QUOTA_EXCEEDED = "quota_exceeded"
    UNSUPPORTED_LANGUAGE = "unsupported_language"
    TIMEOUT = "timeout"
    BAD_RESPONSE = "bad_response"


_PROVIDER_STATUS = {
    ProviderErrorKind.AUTHENTICATION: 401,
    ProviderErrorKind.RATE_LIMIT: 429,
    ProviderErrorKind.QUOTA_EXCEEDED: 429,
    ProviderErrorKind.TIMEOUT: 504,
}


class ProviderError(TelephoneError):
    """The external translation provider failed. Never retried internally."""

    def __init__(
        self,
        message: str = "Translation provider request failed",
        kind: ProviderErrorKind = ProviderErrorKind.BAD_RESPONSE,
    ) -> None:
        self.kind = kind
        super().__init__(
            code="PROVIDER_ERROR",
            message=message,
            status_code=_PROVIDER_STATUS.get(kind, 502),
        )

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["error"]["kind"] = self.kind.value
        return payload


class InternalError(TelephoneError):
    def __init__(self, message: str = "Internal error") -> None:
        super().__init__(code="INTERNAL_ERROR", message=message, status_code=500)
