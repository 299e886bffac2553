"""
Error types raised by the proxy.

Every error carries the HTTP status it maps to and an optional
``details`` object; ``main.py`` renders them as ``{message, details?}``.
"""

from typing import Any, Dict, Optional


class LinkProxyError(Exception):
    """Base error rendered as a JSON error response"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Any = None
    ):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(LinkProxyError):
    status_code = 500
    default_message = "Missing SHORT_IO_API_KEY or SHORT_IO_DOMAIN environment variables."


class InvalidPayloadError(LinkProxyError):
    """Request body could not be used (bad JSON, missing required field)"""

    status_code = 400
    default_message = "Invalid JSON payload"


class PayloadTooLargeError(LinkProxyError):
    status_code = 413
    default_message = "Payload too large"


class UpstreamError(LinkProxyError):
    """
    Short.io answered with a non-2xx status.

    The upstream status is relayed as-is. Decoded JSON bodies (objects,
    arrays, scalars) become ``details``, text bodies are wrapped as
    ``{"raw": text}``.
    """

    default_message = "Short.io API error"

    def __init__(self, status_code: int, data: Any = None):
        self.data = data
        message = None
        details = None
        if isinstance(data, str):
            details = {"raw": data}
        elif data is not None:
            if isinstance(data, dict):
                message = data.get("message") or None
            details = data
        super().__init__(message=message, status_code=status_code, details=details)


class UpstreamUnavailableError(LinkProxyError):
    """Short.io could not be reached (DNS, timeout, connection reset...)"""

    status_code = 502
    default_message = "Short.io API request failed"
