"""Pytest configuration and fixtures."""

import base64
import os
from typing import Optional

import httpx
import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["TRADING_PROVIDER"] = "okx"
os.environ["OKX_API_KEY"] = ""
os.environ["OKX_SECRET_KEY"] = ""
os.environ["OKX_API_PASSPHRASE"] = ""
os.environ["OKX_PROJECT_ID"] = ""
os.environ["DEBUG"] = "false"

from solders.hash import Hash
from solders.keypair import Keypair
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from swapgate.config import get_settings
from swapgate.trading.base import ProviderConfig
from swapgate.trading.factory import reset_provider
from swapgate.trading.network import SolanaRpcError
from swapgate.trading.okx import OkxProvider

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
WALLET = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


class FakeRpc:
    """In-memory stand-in for SolanaRpcClient that records calls."""

    def __init__(
        self,
        fees: Optional[list[int]] = None,
        fee_error: Optional[Exception] = None,
        simulation: Optional[dict] = None,
        simulate_error: Optional[Exception] = None,
        send_result: str = "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnbJLgp8uirBgmQpjKhoR4tjF3ZpRzrFmBV6UjKdiSZkQUW",
        send_error: Optional[Exception] = None,
        statuses: Optional[list] = None,
    ):
        self.fees = fees if fees is not None else []
        self.fee_error = fee_error
        self.simulation = simulation if simulation is not None else {"err": None, "logs": []}
        self.simulate_error = simulate_error
        self.send_result = send_result
        self.send_error = send_error
        self.statuses = list(statuses or [])
        self.fee_calls = 0
        self.simulate_calls = 0
        self.broadcast_calls = 0
        self.status_calls = 0
        self.sent: list[bytes] = []
        self.closed = False

    async def get_recent_prioritization_fees(self) -> list[int]:
        self.fee_calls += 1
        if self.fee_error:
            raise self.fee_error
        return self.fees

    async def simulate_transaction(self, raw_transaction: bytes, commitment: str = "confirmed") -> dict:
        self.simulate_calls += 1
        if self.simulate_error:
            raise self.simulate_error
        return self.simulation

    async def send_raw_transaction(
        self,
        raw_transaction: bytes,
        skip_preflight: bool = False,
        preflight_commitment: str = "confirmed",
    ) -> str:
        self.broadcast_calls += 1
        self.sent.append(raw_transaction)
        if self.send_error:
            raise self.send_error
        return self.send_result

    async def get_signature_status(self, signature: str):
        self.status_calls += 1
        if self.statuses:
            status = self.statuses.pop(0)
            if isinstance(status, Exception):
                raise status
            return status
        return None

    async def close(self) -> None:
        self.closed = True


def signed_transaction_b64() -> str:
    """A real, signed legacy SOL transfer encoded as base64."""
    payer = Keypair()
    ix = transfer(
        TransferParams(from_pubkey=payer.pubkey(), to_pubkey=Keypair().pubkey(), lamports=1)
    )
    tx = Transaction.new_signed_with_payer([ix], payer.pubkey(), [payer], Hash.default())
    return base64.b64encode(bytes(tx)).decode("ascii")


def make_provider(handler, rpc: Optional[FakeRpc] = None, **overrides) -> OkxProvider:
    """OkxProvider wired to an httpx MockTransport handler and a FakeRpc."""
    values = dict(
        api_key="test-key",
        secret_key="test-secret",
        api_passphrase="test-pass",
        project_id="test-project",
        confirm_timeout=0.2,
        confirm_poll_interval=0.01,
    )
    values.update(overrides)
    config = ProviderConfig(**values)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OkxProvider(config, http_client=client, rpc=rpc or FakeRpc())


def unauthorized(request: httpx.Request) -> httpx.Response:
    return httpx.Response(401, json={"code": "50113", "msg": "Invalid Sign"})


@pytest.fixture(autouse=True)
def clean_state():
    """Fresh settings and provider singleton for each test."""
    get_settings.cache_clear()
    reset_provider()
    yield
    reset_provider()
    get_settings.cache_clear()


@pytest.fixture
def fake_rpc():
    return FakeRpc()


@pytest.fixture
def signed_tx():
    return signed_transaction_b64()
