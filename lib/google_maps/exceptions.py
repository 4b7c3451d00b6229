"""
Google Maps Client Exceptions

This module contains the exception classes raised by the Google Maps client.
Remote-service refusals (REQUEST_DENIED, OVER_QUERY_LIMIT, ...) are not raised:
they are carried by the resolved response status.
"""

import logging
from enum import StrEnum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class GoogleMapsError(Exception):
    """Base exception class for all Google Maps client errors, dood!

    Attributes:
        message: Human-readable error message
        code: Error code (if available)
        response: Raw response data (if available)
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response
        logger.debug(f"{type(self).__name__}: {message} (code: {code})")

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} (code: {self.code})"
        return self.message


class ValidationError(GoogleMapsError):
    """Raised when a request is malformed, out of range or misses a required field.

    Always raised locally, before any network call is made. Never transient.
    """

    def __init__(self, message: str, code: Optional[str] = "INVALID_ARGUMENT") -> None:
        super().__init__(message, code)


class UnsupportedOperationError(GoogleMapsError):
    """Raised when a request is asked to do something its endpoint forbids.

    For example, disabling SSL for the places endpoints.
    """

    def __init__(self, message: str, code: Optional[str] = "UNSUPPORTED_OPERATION") -> None:
        super().__init__(message, code)


class DuplicateParameterError(GoogleMapsError):
    """Raised when the same query parameter is added twice."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Query parameter '{key}' is already set", "DUPLICATE_PARAMETER")
        self.key = key


class TransportErrorKind(StrEnum):
    """What went wrong while talking to the remote service"""

    HTTP_STATUS = "http_status"
    """Server answered with non-2xx HTTP status"""
    TIMEOUT = "timeout"
    """Request timed out"""
    NETWORK = "network"
    """Connection, DNS or protocol failure"""
    CANCELLED = "cancelled"
    """Request was cancelled by the caller"""


class TransportError(GoogleMapsError):
    """Raised when the HTTP round trip fails.

    Callers may retry, the client never does. The original httpx exception,
    if any, is available as ``__cause__``.

    Attributes:
        kind: Failure category
        statusCode: HTTP status code for ``TransportErrorKind.HTTP_STATUS``
    """

    def __init__(
        self,
        message: str,
        kind: TransportErrorKind,
        statusCode: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, str(kind), response)
        self.kind = kind
        self.statusCode = statusCode


class ParseError(GoogleMapsError):
    """Raised when a response body is not valid JSON, does not match the expected
    schema or carries a status the endpoint does not define.
    """

    def __init__(
        self, message: str, code: Optional[str] = "PARSE_ERROR", response: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, code, response)


class ConfigurationError(GoogleMapsError):
    """Raised when client configuration can't be loaded or is invalid."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message, code)
