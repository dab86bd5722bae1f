"""Tests for the Solana JSON-RPC client."""

import base64
import json

import httpx
import pytest

from swapgate.trading.network import SolanaRpcClient, SolanaRpcError

RPC_URL = "https://rpc.test"


def rpc_with(handler) -> tuple[SolanaRpcClient, list]:
    """Client wired to a MockTransport; returns the list of decoded request bodies."""
    seen = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return SolanaRpcClient(RPC_URL, http_client=client), seen


def result(value):
    return lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": value})


class TestSolanaRpcClient:

    @pytest.mark.asyncio
    async def test_prioritization_fees(self):
        rpc, seen = rpc_with(result([
            {"slot": 1, "prioritizationFee": 100},
            {"slot": 2, "prioritizationFee": 300},
        ]))

        assert await rpc.get_recent_prioritization_fees() == [100, 300]
        assert seen[0]["method"] == "getRecentPrioritizationFees"
        assert seen[0]["jsonrpc"] == "2.0"

    @pytest.mark.asyncio
    async def test_simulate_returns_value(self):
        rpc, seen = rpc_with(result({"context": {"slot": 5}, "value": {"err": None, "logs": ["ok"]}}))

        value = await rpc.simulate_transaction(b"\x01\x02")

        assert value == {"err": None, "logs": ["ok"]}
        encoded, options = seen[0]["params"]
        assert base64.b64decode(encoded) == b"\x01\x02"
        assert options["encoding"] == "base64"
        assert options["sigVerify"] is True

    @pytest.mark.asyncio
    async def test_send_keeps_preflight(self):
        rpc, seen = rpc_with(result("sig123"))

        assert await rpc.send_raw_transaction(b"\x00") == "sig123"
        options = seen[0]["params"][1]
        assert options["skipPreflight"] is False
        assert options["preflightCommitment"] == "confirmed"

    @pytest.mark.asyncio
    async def test_signature_status(self):
        status = {"slot": 9, "confirmationStatus": "confirmed", "err": None}
        rpc, seen = rpc_with(result({"context": {"slot": 9}, "value": [status]}))

        assert await rpc.get_signature_status("sig123") == status
        assert seen[0]["params"][0] == ["sig123"]

    @pytest.mark.asyncio
    async def test_unknown_signature(self):
        rpc, _ = rpc_with(result({"context": {"slot": 9}, "value": [None]}))

        assert await rpc.get_signature_status("sig123") is None

    @pytest.mark.asyncio
    async def test_rpc_error_object(self):
        rpc, _ = rpc_with(lambda r: httpx.Response(200, json={
            "jsonrpc": "2.0",
            "id": 1,
            "error": {"code": -32002, "message": "Blockhash not found"},
        }))

        with pytest.raises(SolanaRpcError, match="Blockhash not found") as exc_info:
            await rpc.send_raw_transaction(b"\x00")
        assert exc_info.value.code == -32002

    @pytest.mark.asyncio
    async def test_http_error(self):
        rpc, _ = rpc_with(lambda r: httpx.Response(429, text="rate limited"))

        with pytest.raises(SolanaRpcError, match="HTTP 429"):
            await rpc.get_health()

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def fail(request):
            raise httpx.ConnectError("connection refused")

        rpc, _ = rpc_with(fail)

        with pytest.raises(SolanaRpcError, match="transport error"):
            await rpc.get_recent_prioritization_fees()

    @pytest.mark.asyncio
    async def test_close(self):
        rpc, _ = rpc_with(result("ok"))
        await rpc.get_health()

        await rpc.close()

        assert rpc._http_client is None
