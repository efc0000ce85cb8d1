"""REST API client module for itBit.

This module provides the HTTP client for the itBit REST API: public
market data and signed private wallet, order and funding endpoints.

Example:
    ```python
    from itbit_sdk.api import ItbitApiClient

    async with ItbitApiClient(key="...", secret="...") as client:
        ticker = await client.get_ticker("XBTUSD")
        print(ticker["lastPrice"])
    ```
"""

from .error import (
    ItbitError,
    ConfigurationError,
    AuthenticationError,
    TransportError,
    RequestTimeoutError,
    ApiError,
    HttpStatusError,
    DeserializeError,
)

from .client import ItbitApiClient, ACCEPTED_STATUSES, normalize_response

from .validation import SUPPORTED_API_VERSIONS, MAX_PAGE_SIZE

from .types import (
    # Order types
    OrderSide,
    OrderType,
    OrderStatus,
    AddOrderRequest,
    OrdersParams,
    # Trade types
    TradesParams,
    PageParams,
    # Funding types
    CreateWalletRequest,
    WithdrawalRequest,
    DepositRequest,
    WalletTransferRequest,
)

__all__ = [
    # Client
    "ItbitApiClient",
    "ACCEPTED_STATUSES",
    "normalize_response",
    # Errors
    "ItbitError",
    "ConfigurationError",
    "AuthenticationError",
    "TransportError",
    "RequestTimeoutError",
    "ApiError",
    "HttpStatusError",
    "DeserializeError",
    # Constants
    "SUPPORTED_API_VERSIONS",
    "MAX_PAGE_SIZE",
    # Order types
    "OrderSide",
    "OrderType",
    "OrderStatus",
    "AddOrderRequest",
    "OrdersParams",
    # Trade types
    "TradesParams",
    "PageParams",
    # Funding types
    "CreateWalletRequest",
    "WithdrawalRequest",
    "DepositRequest",
    "WalletTransferRequest",
]
