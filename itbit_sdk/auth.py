"""Request signing for itBit private endpoints.

Signing Flow:
    1. Take the next nonce from the client's counter
    2. Build the message: ``str(nonce)`` followed by the compact JSON array
       ``[method, uri, body, str(nonce), str(timestamp)]``
    3. SHA-256 the message, keeping the raw 32-byte digest
    4. HMAC-SHA-512 over ``uri`` bytes + raw digest, keyed with the secret
    5. Base64-encode the HMAC and send it as ``key:signature``
"""

import base64
import hashlib
import hmac
import json
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .api.error import AuthenticationError


AUTHORIZATION_HEADER = "Authorization"
TIMESTAMP_HEADER = "X-Auth-Timestamp"
NONCE_HEADER = "X-Auth-Nonce"


def current_millis() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def canonical_json(value: object) -> str:
    """Serialize JSON with no whitespace, non-ASCII kept verbatim."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class NonceCounter:
    """Strictly increasing nonce source owned by a single client.

    Starts at the current time in milliseconds so a fresh process keeps
    issuing nonces above any used by an earlier one.
    """

    def __init__(self, initial: Optional[int] = None):
        self._value = current_millis() if initial is None else int(initial)
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        """The nonce the next call to :meth:`next` will return."""
        with self._lock:
            return self._value

    def next(self) -> int:
        """Return the current nonce and advance the counter by one."""
        with self._lock:
            nonce = self._value
            self._value += 1
            return nonce


@dataclass(frozen=True)
class SignedRequest:
    """Everything that goes into one request signature."""

    method: str
    uri: str
    body: str
    nonce: int
    timestamp: int

    def message(self) -> bytes:
        """The canonical message that is hashed before signing."""
        payload = canonical_json(
            [self.method, self.uri, self.body, str(self.nonce), str(self.timestamp)]
        )
        return (str(self.nonce) + payload).encode("utf-8")

    def hash_digest(self) -> bytes:
        """Raw SHA-256 digest of :meth:`message` (not hex, not base64)."""
        return hashlib.sha256(self.message()).digest()

    def signature(self, secret: str) -> str:
        """Base64 HMAC-SHA-512 of ``uri`` bytes followed by the raw digest."""
        mac = hmac.new(
            secret.encode("utf-8"),
            self.uri.encode("utf-8") + self.hash_digest(),
            hashlib.sha512,
        )
        return base64.b64encode(mac.digest()).decode("ascii")

    def headers(self, key: str, secret: str) -> dict[str, str]:
        return {
            AUTHORIZATION_HEADER: f"{key}:{self.signature(secret)}",
            TIMESTAMP_HEADER: str(self.timestamp),
            NONCE_HEADER: str(self.nonce),
        }


def sign_request(
    method: str,
    uri: str,
    body: str,
    nonce: int,
    timestamp: int,
    secret: str,
) -> str:
    """Compute the signature for fixed inputs.

    Deterministic: the same inputs always give the same signature.

    Args:
        method: HTTP method (GET, POST, PUT, DELETE)
        uri: Full request URI including any query string
        body: JSON body, or empty string for GET/DELETE
        nonce: Nonce for this request
        timestamp: Unix time in milliseconds
        secret: API secret

    Returns:
        The Base64-encoded signature.
    """
    return SignedRequest(method, uri, body, nonce, timestamp).signature(secret)


def build_auth_headers(
    method: str,
    uri: str,
    body: str,
    key: Optional[str],
    secret: Optional[str],
    counter: NonceCounter,
    clock: Callable[[], int] = current_millis,
) -> dict[str, str]:
    """Consume a nonce and produce the authentication headers for a request.

    Args:
        method: HTTP method
        uri: Full request URI including any query string
        body: Exact body that will be sent ("" when there is none)
        key: API key
        secret: API secret
        counter: Nonce counter owned by the calling client
        clock: Millisecond clock, replaceable in tests

    Returns:
        Dict with Authorization, X-Auth-Timestamp and X-Auth-Nonce.

    Raises:
        AuthenticationError: If key or secret is missing. No nonce is consumed.
    """
    if not key or not secret:
        raise AuthenticationError(method=method, uri=uri)

    timestamp = clock()
    nonce = counter.next()
    return SignedRequest(method, uri, body, nonce, timestamp).headers(key, secret)
