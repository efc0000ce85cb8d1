"""API error types for the itBit REST API client."""

from typing import Any, Optional


def describe_request(method: Optional[str], uri: Optional[str]) -> str:
    """Format the attempted request for error messages."""
    if not method and not uri:
        return "request"
    return f"{method} request to {uri}"


class ItbitError(Exception):
    """Base exception for all client errors."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        uri: Optional[str] = None,
    ):
        self.message = message
        self.method = method
        self.uri = uri
        super().__init__(message)


class ConfigurationError(ItbitError):
    """Invalid client configuration or endpoint argument."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        uri: Optional[str] = None,
    ):
        super().__init__(f"Configuration error: {message}", method, uri)


class AuthenticationError(ItbitError):
    """Key or secret missing for a private request."""

    def __init__(
        self,
        message: str = "must provide key and secret to make a private API request",
        method: Optional[str] = None,
        uri: Optional[str] = None,
    ):
        super().__init__(f"Authentication error: {message}", method, uri)


class TransportError(ItbitError):
    """Network-level failure (connection, DNS, socket)."""

    def __init__(self, method: str, uri: str, cause: BaseException):
        self.cause = cause
        super().__init__(
            f"{describe_request(method, uri)} failed: {cause!r}", method, uri
        )


class RequestTimeoutError(TransportError):
    """Request did not complete within the configured timeout."""

    def __init__(self, method: str, uri: str, cause: BaseException, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(method, uri, cause)
        self.message = f"{describe_request(method, uri)} timed out after {timeout_ms} ms"
        self.args = (self.message,)


class ApiError(ItbitError):
    """Application-level error code returned by the exchange."""

    def __init__(
        self,
        method: str,
        uri: str,
        code: Any,
        description: Optional[str],
        status: Optional[int] = None,
        body: Any = None,
    ):
        self.code = code
        self.description = description
        self.status = status
        self.body = body
        super().__init__(
            f"{describe_request(method, uri)} failed. "
            f"Error code {code}, description: {description}",
            method,
            uri,
        )


class HttpStatusError(ItbitError):
    """Unexpected HTTP status without a structured error body."""

    def __init__(self, method: str, uri: str, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(
            f"{describe_request(method, uri)} failed. "
            f"Response status code {status}, response body {body}",
            method,
            uri,
        )


class DeserializeError(ItbitError):
    """Accepted status but the body is not valid JSON."""

    def __init__(self, method: str, uri: str, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(
            f"{describe_request(method, uri)} returned status {status} "
            f"with an undecodable body: {body[:200]}",
            method,
            uri,
        )
