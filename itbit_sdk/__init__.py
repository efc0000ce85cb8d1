"""itBit SDK - Python client for the itBit exchange REST API.

This SDK provides:
- `api`: async REST client for public market data and private endpoints
- `auth`: nonce counter and request signing for private endpoints
- `config`: immutable client configuration

Example:
    from itbit_sdk import ItbitApiClient, ClientConfig

    config = ClientConfig.from_env()
    async with ItbitApiClient(config) as client:
        book = await client.get_order_book("XBTUSD")
"""

__version__ = "0.1.0"

# ============================================================================
# MODULE IMPORTS
# ============================================================================

from . import api
from . import shared

# ============================================================================
# CONVENIENCE RE-EXPORTS
# ============================================================================

from .api import (
    ItbitApiClient,
    normalize_response,
    # Errors
    ItbitError,
    ConfigurationError,
    AuthenticationError,
    TransportError,
    RequestTimeoutError,
    ApiError,
    HttpStatusError,
    DeserializeError,
    # Types
    OrderSide,
    OrderType,
    OrderStatus,
    AddOrderRequest,
    WithdrawalRequest,
    DepositRequest,
    WalletTransferRequest,
)

from .auth import (
    NonceCounter,
    SignedRequest,
    sign_request,
    build_auth_headers,
)

from .config import (
    ClientConfig,
    DEFAULT_SERVER_V1,
    DEFAULT_SERVER_V2,
    DEFAULT_TIMEOUT_MS,
)

from .shared import to_decimal_string

__all__ = [
    "__version__",
    "api",
    "shared",
    # Client
    "ItbitApiClient",
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
    # Types
    "OrderSide",
    "OrderType",
    "OrderStatus",
    "AddOrderRequest",
    "WithdrawalRequest",
    "DepositRequest",
    "WalletTransferRequest",
    # Auth
    "NonceCounter",
    "SignedRequest",
    "sign_request",
    "build_auth_headers",
    # Config
    "ClientConfig",
    "DEFAULT_SERVER_V1",
    "DEFAULT_SERVER_V2",
    "DEFAULT_TIMEOUT_MS",
    # Utilities
    "to_decimal_string",
]
