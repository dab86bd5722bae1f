"""OKX API request signing.

Signature = Base64(HMAC-SHA256(secret, timestamp + METHOD + path + body)).
``path`` includes the query string for GET requests and ``body`` must be
the exact bytes sent on the wire, so callers serialize once and reuse the
same string for signing and sending.
"""

import base64
import hashlib
import hmac
import json
from datetime import datetime, timezone
from typing import Optional


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def serialize_body(payload: dict) -> str:
    """Serialize a request body once; the result is both signed and sent."""
    return json.dumps(payload, separators=(",", ":"))


class OkxRequestSigner:
    """Signs requests to the OKX REST API.

    Credentials are read-only after construction and may be shared across
    concurrent requests.
    """

    def __init__(self, api_key: str, secret_key: str, passphrase: str, project_id: str):
        self.api_key = api_key
        self._secret_key = secret_key
        self.passphrase = passphrase
        self.project_id = project_id

    def sign(self, timestamp: str, method: str, path: str, body: str = "") -> str:
        """Compute the request signature."""
        message = f"{timestamp}{method.upper()}{path}{body}"
        mac = hmac.new(
            self._secret_key.encode("utf-8"),
            message.encode("utf-8"),
            hashlib.sha256,
        )
        return base64.b64encode(mac.digest()).decode("ascii")

    def headers(self, method: str, path: str, body: str = "") -> dict:
        """Build authentication headers with a fresh timestamp."""
        timestamp = iso_timestamp()
        return {
            "OK-ACCESS-KEY": self.api_key,
            "OK-ACCESS-SIGN": self.sign(timestamp, method, path, body),
            "OK-ACCESS-TIMESTAMP": timestamp,
            "OK-ACCESS-PASSPHRASE": self.passphrase,
            "OK-ACCESS-PROJECT": self.project_id,
            "Content-Type": "application/json",
        }
