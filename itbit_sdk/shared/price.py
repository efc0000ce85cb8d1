"""Price and amount utilities used when building request bodies."""

from decimal import Decimal, InvalidOperation
from typing import Union

from ..api.error import ConfigurationError

DecimalLike = Union[Decimal, int, float, str]


def to_decimal_string(value: DecimalLike, field_name: str = "value") -> str:
    """Normalize a numeric or string value to a plain decimal string.

    Floats are converted through ``repr`` so the shortest round-tripping
    representation is used (``0.1`` becomes ``"0.1"``, not the binary
    expansion). Exponent notation is expanded.

    Raises:
        ConfigurationError: If the value is not a finite decimal
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be numeric, got bool")

    try:
        if isinstance(value, Decimal):
            d = value
        elif isinstance(value, float):
            d = Decimal(repr(value))
        elif isinstance(value, int):
            d = Decimal(value)
        elif isinstance(value, str):
            d = Decimal(value.strip())
        else:
            raise ConfigurationError(
                f"{field_name} must be a number or decimal string, "
                f"got {type(value).__name__}"
            )
    except InvalidOperation:
        raise ConfigurationError(f"{field_name} is not a valid decimal: {value!r}")

    if not d.is_finite():
        raise ConfigurationError(f"{field_name} must be finite, got {value!r}")

    # Keep caller precision; only expand exponents like 1E-8
    return format(d, "f")
