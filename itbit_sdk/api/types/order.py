"""Order-related types for the itBit REST API."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ...shared.price import DecimalLike, to_decimal_string
from ..validation import validate_instrument, validate_page_size


class OrderSide(str, Enum):
    """Order side."""

    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    """Order type. itBit only accepts limit orders."""

    LIMIT = "limit"


class OrderStatus(str, Enum):
    """Order status filter values."""

    SUBMITTED = "submitted"
    OPEN = "open"
    FILLED = "filled"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


def enum_value(value: Union[Enum, str]) -> str:
    """Unwrap an enum member to its wire string."""
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass
class AddOrderRequest:
    """Request for POST /wallets/{walletId}/orders."""

    side: Union[OrderSide, str]
    type: Union[OrderType, str]
    amount: DecimalLike
    price: DecimalLike
    instrument: str
    metadata: Any = None
    client_order_identifier: Optional[str] = None

    @property
    def currency(self) -> str:
        """Base currency, the first three characters of the instrument."""
        return self.instrument[:3]

    def to_dict(self) -> dict:
        instrument = validate_instrument(self.instrument)
        body: dict[str, Any] = {
            "side": enum_value(self.side),
            "type": enum_value(self.type),
            "currency": instrument[:3],
            "amount": to_decimal_string(self.amount, "amount"),
            "price": to_decimal_string(self.price, "price"),
            "instrument": instrument,
        }
        # Absent optional keys must not be sent at all
        if self.metadata:
            body["metadata"] = self.metadata
        if self.client_order_identifier:
            body["clientOrderIdentifier"] = self.client_order_identifier
        return body


@dataclass
class OrdersParams:
    """Query parameters for GET /wallets/{walletId}/orders."""

    instrument: Optional[str] = None
    status: Optional[Union[OrderStatus, str]] = None
    page: Optional[int] = None
    per_page: Optional[int] = None

    def to_query_params(self) -> dict:
        """Convert to query parameters dict."""
        params: dict[str, Any] = {}
        if self.instrument is not None:
            params["instrument"] = self.instrument
        if self.status is not None:
            params["status"] = enum_value(self.status)
        if self.page is not None:
            params["page"] = self.page
        if self.per_page is not None:
            validate_page_size(self.per_page)
            params["perPage"] = self.per_page
        return params
