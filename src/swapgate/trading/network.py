"""Minimal async Solana JSON-RPC client.

Only the calls the swap workflow needs: priority fee sampling,
simulation, broadcast and signature status lookup.
"""

import base64
import itertools
import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_COMMITMENT = "confirmed"


class SolanaRpcError(Exception):
    """JSON-RPC error object returned by the node, or a transport failure."""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.code = code
        self.data = data


class SolanaRpcClient:
    """Shared, long-lived RPC connection handle.

    Holds one httpx.AsyncClient for the process lifetime; no per-request
    state is kept, so a single instance serves concurrent requests.
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.rpc_url = rpc_url
        self._http_client = http_client
        self._timeout = timeout
        self._ids = itertools.count(1)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def call(self, method: str, params: Optional[list] = None) -> Any:
        """Issue a JSON-RPC request and return its ``result``."""
        client = await self._get_client()
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }

        try:
            response = await client.post(self.rpc_url, json=payload)
        except httpx.HTTPError as e:
            raise SolanaRpcError(f"RPC {method} transport error: {e}") from e

        if response.status_code != 200:
            raise SolanaRpcError(
                f"RPC {method} HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise SolanaRpcError(f"RPC {method} returned invalid JSON: {e}") from e

        if "error" in body:
            error = body["error"]
            if isinstance(error, dict):
                raise SolanaRpcError(
                    error.get("message", str(error)),
                    code=error.get("code"),
                    data=error.get("data"),
                )
            raise SolanaRpcError(str(error))

        return body.get("result")

    async def get_recent_prioritization_fees(self) -> list[int]:
        """Per-slot priority fees (micro-lamports per CU) for recent slots."""
        result = await self.call("getRecentPrioritizationFees") or []
        return [int(entry.get("prioritizationFee", 0)) for entry in result]

    async def simulate_transaction(
        self,
        raw_transaction: bytes,
        commitment: str = DEFAULT_COMMITMENT,
    ) -> dict:
        """Dry-run a signed transaction. Returns the ``value`` object (err, logs, ...)."""
        result = await self.call(
            "simulateTransaction",
            [
                base64.b64encode(raw_transaction).decode("ascii"),
                {"encoding": "base64", "commitment": commitment, "sigVerify": True},
            ],
        )
        return (result or {}).get("value") or {}

    async def send_raw_transaction(
        self,
        raw_transaction: bytes,
        skip_preflight: bool = False,
        preflight_commitment: str = DEFAULT_COMMITMENT,
    ) -> str:
        """Broadcast a signed transaction and return its signature."""
        return await self.call(
            "sendTransaction",
            [
                base64.b64encode(raw_transaction).decode("ascii"),
                {
                    "encoding": "base64",
                    "skipPreflight": skip_preflight,
                    "preflightCommitment": preflight_commitment,
                },
            ],
        )

    async def get_signature_status(self, signature: str) -> Optional[dict]:
        """Status of a single signature, or None if the node has not seen it yet.

        The dict has ``confirmationStatus`` (processed/confirmed/finalized),
        ``err`` and ``slot`` keys.
        """
        result = await self.call(
            "getSignatureStatuses",
            [[signature], {"searchTransactionHistory": False}],
        )
        statuses = (result or {}).get("value") or []
        return statuses[0] if statuses else None

    async def get_health(self) -> str:
        return await self.call("getHealth")
