"""Tests for OKX request signing."""

import base64
import hashlib
import hmac
import re
from datetime import datetime, timezone

from swapgate.trading.signer import OkxRequestSigner, iso_timestamp, serialize_body


def make_signer(secret: str = "secret") -> OkxRequestSigner:
    return OkxRequestSigner(
        api_key="key", secret_key=secret, passphrase="pass", project_id="project"
    )


class TestSign:
    """Tests for the HMAC signature primitive."""

    def test_matches_reference_hmac(self):
        signer = make_signer("my-secret")
        ts = "2024-01-01T00:00:00.000Z"
        path = "/api/v5/dex/aggregator/quote?chainId=501&amount=1000"

        expected = base64.b64encode(
            hmac.new(
                b"my-secret",
                f"{ts}GET{path}".encode(),
                hashlib.sha256,
            ).digest()
        ).decode()

        assert signer.sign(ts, "GET", path, "") == expected

    def test_deterministic(self):
        signer = make_signer()
        ts = "2024-01-01T00:00:00.000Z"

        first = signer.sign(ts, "GET", "/api/v5/x", "")
        second = signer.sign(ts, "GET", "/api/v5/x", "")

        assert first == second

    def test_method_is_uppercased(self):
        signer = make_signer()
        ts = "2024-01-01T00:00:00.000Z"

        assert signer.sign(ts, "post", "/p", "{}") == signer.sign(ts, "POST", "/p", "{}")

    def test_any_input_change_changes_signature(self):
        signer = make_signer()
        base = signer.sign("2024-01-01T00:00:00.000Z", "GET", "/api/v5/x", "")

        assert signer.sign("2024-01-01T00:00:00.001Z", "GET", "/api/v5/x", "") != base
        assert signer.sign("2024-01-01T00:00:00.000Z", "PUT", "/api/v5/x", "") != base
        assert signer.sign("2024-01-01T00:00:00.000Z", "GET", "/api/v5/y", "") != base
        assert signer.sign("2024-01-01T00:00:00.000Z", "GET", "/api/v5/x", " ") != base
        assert make_signer("other").sign("2024-01-01T00:00:00.000Z", "GET", "/api/v5/x", "") != base


class TestHeaders:
    """Tests for header assembly."""

    def test_headers_are_self_consistent(self):
        signer = make_signer()
        body = serialize_body({"amount": "1"})

        headers = signer.headers("POST", "/api/v5/dex/aggregator/swap", body)

        assert headers["OK-ACCESS-KEY"] == "key"
        assert headers["OK-ACCESS-PASSPHRASE"] == "pass"
        assert headers["OK-ACCESS-PROJECT"] == "project"
        assert headers["Content-Type"] == "application/json"
        assert headers["OK-ACCESS-SIGN"] == signer.sign(
            headers["OK-ACCESS-TIMESTAMP"], "POST", "/api/v5/dex/aggregator/swap", body
        )


class TestTimestamp:
    """Tests for ISO-8601 timestamps."""

    def test_format(self):
        ts = iso_timestamp(datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc))
        assert ts == "2024-05-06T07:08:09.123Z"

    def test_fresh_timestamp_shape(self):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", iso_timestamp())


def test_serialize_body_is_compact():
    assert serialize_body({"a": "1", "b": "2"}) == '{"a":"1","b":"2"}'
