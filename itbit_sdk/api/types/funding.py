"""Wallet and funding request types for the itBit REST API."""

from dataclasses import dataclass

from ...shared.price import DecimalLike, to_decimal_string
from ..validation import validate_identifier


@dataclass
class CreateWalletRequest:
    """Request for POST /wallets."""

    user_id: str
    name: str

    def to_dict(self) -> dict:
        return {
            "userId": validate_identifier(self.user_id, "user_id"),
            "name": validate_identifier(self.name, "name"),
        }


@dataclass
class WithdrawalRequest:
    """Request for POST /wallets/{walletId}/cryptocurrency_withdrawals."""

    currency: str
    amount: DecimalLike
    address: str

    def to_dict(self) -> dict:
        return {
            "currency": validate_identifier(self.currency, "currency"),
            "amount": to_decimal_string(self.amount, "amount"),
            "address": validate_identifier(self.address, "address"),
        }


@dataclass
class DepositRequest:
    """Request for POST /wallets/{walletId}/cryptocurrency_deposits."""

    currency: str

    def to_dict(self) -> dict:
        return {"currency": validate_identifier(self.currency, "currency")}


@dataclass
class WalletTransferRequest:
    """Request for POST /wallet_transfers."""

    source_wallet_id: str
    destination_wallet_id: str
    amount: DecimalLike
    currency_code: str

    def to_dict(self) -> dict:
        return {
            "sourceWalletId": validate_identifier(self.source_wallet_id, "source_wallet_id"),
            "destinationWalletId": validate_identifier(
                self.destination_wallet_id, "destination_wallet_id"
            ),
            "amount": to_decimal_string(self.amount, "amount"),
            "currencyCode": validate_identifier(self.currency_code, "currency_code"),
        }
