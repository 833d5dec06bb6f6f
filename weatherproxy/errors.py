"""Exceptions that map directly onto HTTP error responses.

The handler registered in ``main.py`` renders every ``ProxyError`` as
``{"error": message}`` with the exception's status code, adding ``code``
when the upstream provider supplied one.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

FETCH_FAILED_MESSAGE = "Failed to fetch weather data"


class ProxyError(Exception):
    """Base for errors surfaced to API clients."""

    def __init__(
        self,
        message: str = FETCH_FAILED_MESSAGE,
        *,
        status_code: int = 500,
        code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.code is not None:
            body["code"] = self.code
        return body


class ConfigurationError(ProxyError):
    """The server is missing required configuration (500)."""

    def __init__(self, message: str = "Server configuration error") -> None:
        super().__init__(message, status_code=500)


class UpstreamError(ProxyError):
    """The weather provider rejected the request or could not be reached."""

    def __init__(
        self,
        status_code: int,
        message: str = "Weather API error",
        code: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code=status_code, code=code)
