"""API type definitions for the itBit REST API."""

from .order import (
    OrderSide,
    OrderType,
    OrderStatus,
    AddOrderRequest,
    OrdersParams,
)

from .trade import (
    TradesParams,
    PageParams,
)

from .funding import (
    CreateWalletRequest,
    WithdrawalRequest,
    DepositRequest,
    WalletTransferRequest,
)

__all__ = [
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
