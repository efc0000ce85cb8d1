"""Input validation utilities for the API client."""

from typing import Any

from .error import ConfigurationError

SUPPORTED_API_VERSIONS = ("v1", "v2")

PRIVATE_METHODS = ("GET", "POST", "PUT", "DELETE")

MAX_PAGE_SIZE = 50


def validate_version(version: str) -> None:
    """Validate a public API version string.

    Raises:
        ConfigurationError: If version is not v1 or v2
    """
    if version not in SUPPORTED_API_VERSIONS:
        raise ConfigurationError(f"version {version} needs to be either v1 or v2")


def validate_method(method: str) -> None:
    """Validate the HTTP method for a private request.

    Raises:
        ConfigurationError: If method is not GET, POST, PUT or DELETE
    """
    if method not in PRIVATE_METHODS:
        raise ConfigurationError(
            f"method {method} must be one of {', '.join(PRIVATE_METHODS)}"
        )


def validate_identifier(value: Any, field_name: str) -> str:
    """Validate a path identifier such as a wallet id or ticker symbol.

    Raises:
        ConfigurationError: If the value is empty
    """
    if value is None or not str(value).strip():
        raise ConfigurationError(f"{field_name} cannot be empty")
    return str(value)


def validate_instrument(instrument: str) -> str:
    """Validate an instrument symbol like XBTUSD.

    The first three characters are used as the order currency.

    Raises:
        ConfigurationError: If the instrument is shorter than 3 characters
    """
    instrument = validate_identifier(instrument, "instrument")
    if len(instrument) < 3:
        raise ConfigurationError(f"instrument {instrument} is too short")
    return instrument


def validate_page_size(per_page: int) -> None:
    """Validate pagination page size.

    Raises:
        ConfigurationError: If per_page is out of bounds
    """
    if per_page < 1 or per_page > MAX_PAGE_SIZE:
        raise ConfigurationError(f"per_page must be 1-{MAX_PAGE_SIZE}")
