"""Tests for nonce sequencing and request signing."""

import base64
import hashlib
import hmac
import threading

import pytest

from itbit_sdk import AuthenticationError, NonceCounter, SignedRequest, sign_request
from itbit_sdk.auth import build_auth_headers, canonical_json

URI = "https://api.itbit.com/v1/wallets?userId=0A5D0B29-6AF4-4E7B-BA8C-4C2D2F1CC6F0"
SECRET = "0F5C35B6-6A53-4CE3-9B7D-55B1B4D1D2E1"
NONCE = 1
TIMESTAMP = 1405385860202

# Computed independently with openssl dgst -sha256 / -sha512 -hmac
GOLDEN_SIGNATURE = (
    "wfTky4sx4fq+GVknur3b+JTtmIennGroVhApJezSd0fTlNZGSNL8Kfv5tq0XYqoN+IszKm5vL4PrMZh5hdtZBw=="
)


def reference_signature(method, uri, body, nonce, timestamp, secret):
    message = (
        f'{nonce}["{method}","{uri}","{body}","{nonce}","{timestamp}"]'
    ).encode("utf-8")
    digest = hashlib.sha256(message).digest()
    mac = hmac.new(secret.encode(), uri.encode() + digest, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode()


class TestNonceCounter:
    def test_starts_at_initial_value(self):
        counter = NonceCounter(42)
        assert counter.value == 42
        assert counter.next() == 42
        assert counter.value == 43

    def test_defaults_to_current_millis(self, monkeypatch):
        monkeypatch.setattr("itbit_sdk.auth.time.time", lambda: 1700000000.123)
        assert NonceCounter().value == 1700000000123

    def test_sequential_nonces_increase_by_one(self):
        counter = NonceCounter(500)
        issued = [counter.next() for _ in range(10)]
        assert issued == list(range(500, 510))

    def test_concurrent_threads_never_share_a_nonce(self):
        counter = NonceCounter(0)
        issued = []
        lock = threading.Lock()

        def worker():
            local = [counter.next() for _ in range(1000)]
            with lock:
                issued.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(issued) == list(range(8000))
        assert counter.value == 8000


class TestSignedRequest:
    def test_message_layout(self):
        request = SignedRequest("GET", URI, "", NONCE, TIMESTAMP)
        expected = f'1["GET","{URI}","","1","1405385860202"]'.encode()
        assert request.message() == expected

    def test_message_embeds_json_body_as_string(self):
        body = canonical_json({"currency": "XBT", "amount": "1.5"})
        request = SignedRequest("POST", "https://x/v1/w", body, 7, 8)
        assert request.message() == (
            b'7["POST","https://x/v1/w","{\\"currency\\":\\"XBT\\",\\"amount\\":\\"1.5\\"}","7","8"]'
        )

    def test_hash_digest_is_raw_bytes(self):
        request = SignedRequest("GET", URI, "", NONCE, TIMESTAMP)
        digest = request.hash_digest()
        assert isinstance(digest, bytes)
        assert len(digest) == 32
        assert digest == hashlib.sha256(request.message()).digest()

    def test_signature_matches_reference(self):
        signature = sign_request("GET", URI, "", NONCE, TIMESTAMP, SECRET)
        assert signature == reference_signature("GET", URI, "", NONCE, TIMESTAMP, SECRET)

    def test_signature_golden_value(self):
        signature = sign_request("GET", URI, "", NONCE, TIMESTAMP, SECRET)
        assert signature == GOLDEN_SIGNATURE

    def test_signature_is_deterministic(self):
        first = sign_request("DELETE", URI, "", 99, TIMESTAMP, SECRET)
        second = sign_request("DELETE", URI, "", 99, TIMESTAMP, SECRET)
        assert first == second

    def test_signature_uses_raw_digest_not_hex(self):
        # The HMAC input is uri bytes + the 32 raw digest bytes
        request = SignedRequest("GET", URI, "", NONCE, TIMESTAMP)
        hex_variant = base64.b64encode(
            hmac.new(
                SECRET.encode(),
                (URI + hashlib.sha256(request.message()).hexdigest()).encode(),
                hashlib.sha512,
            ).digest()
        ).decode()
        assert request.signature(SECRET) != hex_variant

    @pytest.mark.parametrize(
        "field,value",
        [("method", "POST"), ("uri", URI + "x"), ("nonce", 2), ("timestamp", TIMESTAMP + 1)],
    )
    def test_any_input_change_alters_signature(self, field, value):
        base = dict(method="GET", uri=URI, body="", nonce=NONCE, timestamp=TIMESTAMP)
        changed = dict(base, **{field: value})
        assert SignedRequest(**base).signature(SECRET) != SignedRequest(**changed).signature(SECRET)

    def test_signature_decodes_to_sha512_length(self):
        signature = sign_request("GET", URI, "", NONCE, TIMESTAMP, SECRET)
        assert len(base64.b64decode(signature)) == 64


class TestBuildAuthHeaders:
    def test_headers(self):
        counter = NonceCounter(NONCE)
        headers = build_auth_headers(
            "GET", URI, "", "my-key", SECRET, counter, clock=lambda: TIMESTAMP
        )
        expected_sig = reference_signature("GET", URI, "", NONCE, TIMESTAMP, SECRET)
        assert headers == {
            "Authorization": f"my-key:{expected_sig}",
            "X-Auth-Timestamp": "1405385860202",
            "X-Auth-Nonce": "1",
        }
        assert counter.value == NONCE + 1

    @pytest.mark.parametrize("key,secret", [(None, SECRET), ("key", None), ("", SECRET), ("key", "")])
    def test_missing_credentials_do_not_consume_nonce(self, key, secret):
        counter = NonceCounter(10)
        with pytest.raises(AuthenticationError) as exc_info:
            build_auth_headers("GET", URI, "", key, secret, counter)
        assert counter.value == 10
        assert exc_info.value.uri == URI
        assert exc_info.value.method == "GET"
