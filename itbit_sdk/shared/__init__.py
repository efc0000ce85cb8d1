"""Shared utilities used across the SDK."""

from .price import DecimalLike, to_decimal_string

__all__ = [
    "DecimalLike",
    "to_decimal_string",
]
