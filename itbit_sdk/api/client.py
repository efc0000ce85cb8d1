"""itBit REST API client implementation."""

import asyncio
import json
import logging
from typing import Any, Optional, Union
from urllib.parse import quote, urlencode

import aiohttp
from yarl import URL

from ..auth import NonceCounter, build_auth_headers, canonical_json
from ..config import ClientConfig
from .error import (
    ApiError,
    DeserializeError,
    HttpStatusError,
    RequestTimeoutError,
    TransportError,
)
from .validation import (
    validate_identifier,
    validate_method,
    validate_version,
)
from .types import (
    AddOrderRequest,
    CreateWalletRequest,
    DepositRequest,
    OrderSide,
    OrderStatus,
    OrderType,
    OrdersParams,
    PageParams,
    TradesParams,
    WalletTransferRequest,
    WithdrawalRequest,
)
from ..shared.price import DecimalLike

logger = logging.getLogger(__name__)

# Statuses treated as success
ACCEPTED_STATUSES = frozenset({200, 201, 202})

CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_query(params: Optional[dict]) -> str:
    """URL-encode query arguments, dropping None values.

    Spaces are encoded as ``%20`` rather than ``+``.
    """
    if not params:
        return ""
    filtered = [(k, v) for k, v in params.items() if v is not None]
    return urlencode(filtered, quote_via=quote)


def path_segment(value: Any, field_name: str) -> str:
    """Validate and percent-quote a single URL path segment."""
    return quote(validate_identifier(value, field_name), safe="")


def normalize_response(method: str, uri: str, status: int, body: str) -> Any:
    """Classify an HTTP response into a decoded result or an error.

    Precedence is fixed: an error ``code`` in the body wins over the HTTP
    status, which wins over a body that cannot be decoded.

    Args:
        method: HTTP method of the request
        uri: Full request URI
        status: HTTP status code
        body: Raw response body text

    Returns:
        The decoded JSON body, or None for an empty body

    Raises:
        ApiError: If the body carries an error code
        HttpStatusError: If the status is not 200, 201 or 202
        DeserializeError: If an accepted response is not valid JSON
    """
    decoded: Any = None
    decode_failed = False
    if body and body.strip():
        try:
            decoded = json.loads(body)
        except ValueError:
            decode_failed = True

    if isinstance(decoded, dict) and decoded.get("code"):
        error = ApiError(
            method,
            uri,
            decoded["code"],
            decoded.get("description"),
            status=status,
            body=decoded,
        )
        logger.warning(error.message)
        raise error

    if status not in ACCEPTED_STATUSES:
        error = HttpStatusError(method, uri, status, body)
        logger.warning(error.message)
        raise error

    if decode_failed:
        raise DeserializeError(method, uri, status, body)

    return decoded


class ItbitApiClient:
    """itBit REST API client.

    Provides public market data (ticker, order book) and signed private
    endpoints for wallets, orders, trades and funding. Every private request
    consumes one nonce from the client's counter.

    Example:
        ```python
        async with ItbitApiClient(key="...", secret="...") as client:
            ticker = await client.get_ticker("XBTUSD")
            wallets = await client.get_wallets(user_id)
        ```
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        key: Optional[str] = None,
        secret: Optional[str] = None,
        server_v1: Optional[str] = None,
        server_v2: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        session: Optional[aiohttp.ClientSession] = None,
        nonce: Optional[int] = None,
    ):
        """Create a new client.

        Args:
            config: Base configuration; defaults to :class:`ClientConfig()`
            key: API key override
            secret: API secret override
            server_v1: v1 base URL override (public v1 and all private calls)
            server_v2: v2 base URL override (public v2 calls)
            timeout_ms: Per-request timeout override in milliseconds
            session: Optional externally owned aiohttp session
            nonce: Optional initial nonce; defaults to current time in ms
        """
        self._config = (config or ClientConfig()).with_overrides(
            key=key,
            secret=secret,
            server_v1=server_v1,
            server_v2=server_v2,
            timeout_ms=timeout_ms,
        )
        self._nonce = NonceCounter(nonce)
        self._timeout = aiohttp.ClientTimeout(total=self._config.timeout_secs)
        self._session = session
        self._owns_session = session is None

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    @property
    def nonce(self) -> int:
        """The nonce the next private request will use."""
        return self._nonce.value

    async def __aenter__(self) -> "ItbitApiClient":
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _base_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._config.user_agent,
            "Content-Type": CONTENT_TYPE,
        }

    # =========================================================================
    # Request plumbing
    # =========================================================================

    async def _make_public_request(
        self,
        version: str,
        path: str,
        params: Optional[dict] = None,
    ) -> Any:
        """Issue an unsigned GET against the v1 or v2 base URL.

        Raises:
            ConfigurationError: If version is not v1 or v2 (no request is sent)
        """
        validate_version(version)
        server = self._config.server_v1 if version == "v1" else self._config.server_v2

        uri = server + path
        query = encode_query(params)
        if query:
            uri = f"{uri}?{query}"

        return await self._execute("GET", uri, self._base_headers(), None)

    async def _make_private_request(
        self,
        method: str,
        path: str,
        args: Optional[dict] = None,
    ) -> Any:
        """Issue a signed request against the v1 base URL.

        GET arguments go in the query string; POST and PUT arguments are sent
        as a compact JSON body. DELETE sends neither.

        Raises:
            AuthenticationError: If key or secret is missing
        """
        validate_method(method)
        uri = self._config.server_v1 + path

        body = ""
        if method in ("POST", "PUT"):
            body = canonical_json(args or {})
        elif method == "GET":
            query = encode_query(args)
            if query:
                uri = f"{uri}?{query}"

        headers = self._base_headers()
        headers.update(
            build_auth_headers(
                method,
                uri,
                body,
                self._config.key,
                self._config.secret,
                self._nonce,
            )
        )

        data = body.encode("utf-8") if body else None
        return await self._execute(method, uri, headers, data)

    async def _execute(
        self,
        method: str,
        uri: str,
        headers: dict[str, str],
        data: Optional[bytes],
    ) -> Any:
        """Send the request and normalize the outcome.

        Raises:
            RequestTimeoutError: If the request exceeds the client timeout
            TransportError: On any other network failure
        """
        session = await self._ensure_session()
        logger.debug(f"Sending {method} request to {uri}")

        try:
            # encoded=True keeps the signed query string byte-for-byte
            async with session.request(
                method,
                URL(uri, encoded=True),
                headers=headers,
                data=data,
                timeout=self._timeout,
            ) as response:
                status = response.status
                raw = await response.read()
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(method, uri, e, self._config.timeout_ms) from e
        except (aiohttp.ClientError, OSError) as e:
            raise TransportError(method, uri, e) from e

        logger.debug(f"{method} request to {uri} returned status {status}")
        body = raw.decode("utf-8", errors="backslashreplace") if raw else ""
        return normalize_response(method, uri, status, body)

    # =========================================================================
    # Market endpoints (public)
    # =========================================================================

    async def get_order_book(self, symbol: str) -> Any:
        """Get the full order book for a market.

        Args:
            symbol: Ticker symbol, e.g. XBTUSD
        """
        return await self._make_public_request(
            "v2", f"/markets/{path_segment(symbol, 'symbol')}/orders"
        )

    async def get_ticker(self, symbol: str) -> Any:
        """Get the ticker for a market.

        Args:
            symbol: Ticker symbol, e.g. XBTUSD
        """
        return await self._make_public_request(
            "v1", f"/markets/{path_segment(symbol, 'symbol')}/ticker"
        )

    # =========================================================================
    # Wallet endpoints
    # =========================================================================

    async def get_wallets(
        self,
        user_id: str,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Any:
        """List all wallets for a user."""
        params: dict[str, Any] = {"userId": validate_identifier(user_id, "user_id")}
        params.update(PageParams(page, per_page).to_query_params())
        return await self._make_private_request("GET", "/wallets", params)

    async def create_wallet(self, user_id: str, name: str) -> Any:
        """Create a new wallet."""
        request = CreateWalletRequest(user_id=user_id, name=name)
        return await self._make_private_request("POST", "/wallets", request.to_dict())

    async def get_wallet(self, wallet_id: str) -> Any:
        """Get a single wallet with its balances."""
        return await self._make_private_request(
            "GET", f"/wallets/{path_segment(wallet_id, 'wallet_id')}"
        )

    async def get_wallet_balance(self, wallet_id: str, currency: str) -> Any:
        """Get the balance of one currency in a wallet."""
        wallet = path_segment(wallet_id, "wallet_id")
        code = path_segment(currency, "currency")
        return await self._make_private_request(
            "GET", f"/wallets/{wallet}/balances/{code}"
        )

    # =========================================================================
    # Order endpoints
    # =========================================================================

    async def get_orders(
        self,
        wallet_id: str,
        instrument: Optional[str] = None,
        status: Optional[Union[OrderStatus, str]] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Any:
        """List orders in a wallet, optionally filtered by instrument and status."""
        params = OrdersParams(instrument, status, page, per_page).to_query_params()
        return await self._make_private_request(
            "GET", f"/wallets/{path_segment(wallet_id, 'wallet_id')}/orders", params
        )

    async def get_order(self, wallet_id: str, order_id: str) -> Any:
        """Get a single order."""
        wallet = path_segment(wallet_id, "wallet_id")
        order = path_segment(order_id, "order_id")
        return await self._make_private_request("GET", f"/wallets/{wallet}/orders/{order}")

    async def add_order(
        self,
        wallet_id: str,
        side: Union[OrderSide, str],
        type: Union[OrderType, str],
        amount: DecimalLike,
        price: DecimalLike,
        instrument: str,
        metadata: Any = None,
        client_order_identifier: Optional[str] = None,
    ) -> Any:
        """Place a new limit order.

        The order currency is the first three characters of ``instrument``.
        ``metadata`` and ``client_order_identifier`` are only sent when set.

        Args:
            wallet_id: Wallet to trade from
            side: buy or sell
            type: Order type (limit)
            amount: Order size, sent as a decimal string
            price: Limit price, sent as a decimal string
            instrument: Instrument symbol, e.g. XBTUSD
            metadata: Optional metadata object echoed back by the exchange
            client_order_identifier: Optional caller-chosen order id
        """
        request = AddOrderRequest(
            side=side,
            type=type,
            amount=amount,
            price=price,
            instrument=instrument,
            metadata=metadata,
            client_order_identifier=client_order_identifier,
        )
        return await self.place_order(wallet_id, request)

    async def place_order(self, wallet_id: str, request: AddOrderRequest) -> Any:
        """Place an order described by an :class:`AddOrderRequest`."""
        body = request.to_dict()
        return await self._make_private_request(
            "POST", f"/wallets/{path_segment(wallet_id, 'wallet_id')}/orders", body
        )

    async def cancel_order(self, wallet_id: str, order_id: str) -> Any:
        """Cancel an open order. The exchange answers 202 with an empty body."""
        wallet = path_segment(wallet_id, "wallet_id")
        order = path_segment(order_id, "order_id")
        return await self._make_private_request(
            "DELETE", f"/wallets/{wallet}/orders/{order}"
        )

    # =========================================================================
    # Trade and funding endpoints
    # =========================================================================

    async def get_trades(
        self,
        wallet_id: str,
        range_start: Optional[str] = None,
        range_end: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Any:
        """Get the trade history of a wallet."""
        params = TradesParams(range_start, range_end, page, per_page).to_query_params()
        return await self._make_private_request(
            "GET", f"/wallets/{path_segment(wallet_id, 'wallet_id')}/trades", params
        )

    async def get_funding_history(
        self,
        wallet_id: str,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Any:
        """Get deposits and withdrawals for a wallet."""
        params = PageParams(page, per_page).to_query_params()
        return await self._make_private_request(
            "GET",
            f"/wallets/{path_segment(wallet_id, 'wallet_id')}/funding_history",
            params,
        )

    async def cryptocurrency_withdrawal(
        self,
        wallet_id: str,
        currency: str,
        amount: DecimalLike,
        address: str,
    ) -> Any:
        """Withdraw cryptocurrency to an external address."""
        request = WithdrawalRequest(currency=currency, amount=amount, address=address)
        return await self._make_private_request(
            "POST",
            f"/wallets/{path_segment(wallet_id, 'wallet_id')}/cryptocurrency_withdrawals",
            request.to_dict(),
        )

    async def cryptocurrency_deposit(self, wallet_id: str, currency: str) -> Any:
        """Request a new cryptocurrency deposit address."""
        request = DepositRequest(currency=currency)
        return await self._make_private_request(
            "POST",
            f"/wallets/{path_segment(wallet_id, 'wallet_id')}/cryptocurrency_deposits",
            request.to_dict(),
        )

    async def create_wallet_transfer(
        self,
        source_wallet_id: str,
        destination_wallet_id: str,
        amount: DecimalLike,
        currency: str,
    ) -> Any:
        """Move funds between two wallets of the same user."""
        request = WalletTransferRequest(
            source_wallet_id=source_wallet_id,
            destination_wallet_id=destination_wallet_id,
            amount=amount,
            currency_code=currency,
        )
        return await self._make_private_request(
            "POST", "/wallet_transfers", request.to_dict()
        )
