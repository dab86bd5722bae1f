"""Submission of user-signed Solana transactions.

Steps run strictly in order and each gates the next:

1. Decode   - base64 -> solders VersionedTransaction
2. Simulate - dry-run; a failing simulation is never broadcast
3. Broadcast - sendTransaction with preflight enabled
4. Confirm  - poll signature status until "confirmed", bounded by a timeout

Payloads produced by the mock builder short-circuit to a synthetic
success once decoding has failed.
"""

import asyncio
import base64
import binascii
import logging

from solders.transaction import VersionedTransaction

from swapgate.trading import mock
from swapgate.trading.base import DataSource, SubmitTransactionInput, SwapResult
from swapgate.trading.errors import (
    BroadcastError,
    ConfirmationFailedError,
    ConfirmationTimeoutError,
    SimulationFailedError,
    SimulationUnavailableError,
    TradingError,
    TransactionDecodeError,
)
from swapgate.trading.network import DEFAULT_COMMITMENT, SolanaRpcClient, SolanaRpcError

logger = logging.getLogger(__name__)

# Statuses that satisfy a "confirmed" commitment target
CONFIRMED_STATUSES = ("confirmed", "finalized")


def decode_transaction(encoded: str) -> tuple[VersionedTransaction, bytes]:
    """Decode a base64 signed transaction (legacy or v0 message)."""
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise TransactionDecodeError(f"Signed transaction is not valid base64: {e}") from e

    try:
        return VersionedTransaction.from_bytes(raw), raw
    except Exception as e:
        raise TransactionDecodeError(f"Failed to deserialize transaction: {e}") from e


class TransactionSubmitter:
    """Simulates, broadcasts and confirms already-signed transactions."""

    def __init__(
        self,
        rpc: SolanaRpcClient,
        confirm_timeout: float = 60.0,
        poll_interval: float = 0.5,
        commitment: str = DEFAULT_COMMITMENT,
    ):
        self.rpc = rpc
        self.confirm_timeout = confirm_timeout
        self.poll_interval = poll_interval
        self.commitment = commitment

    async def submit(self, request: SubmitTransactionInput) -> SwapResult:
        """Run the full submission state machine. Never raises."""
        mev = request.enable_mev_protection

        try:
            transaction, raw = decode_transaction(request.signed_transaction)
        except TransactionDecodeError as e:
            if mock.is_mock_transaction(request.signed_transaction):
                tx_id = mock.mock_tx_id()
                logger.warning(f"Mock transaction submitted, returning synthetic tx id {tx_id}")
                return SwapResult(
                    success=True,
                    tx_id=tx_id,
                    mev_protected=mev,
                    source=DataSource.MOCK,
                )
            logger.error(f"Submit transaction failed: {e}")
            return SwapResult(success=False, error=str(e), error_code=e.code, mev_protected=mev)

        try:
            await self._simulate(raw)
            tx_id = await self._broadcast(raw)
            await self._wait_for_confirmation(tx_id)
        except TradingError as e:
            logger.error(f"Submit transaction failed ({e.code}): {e}")
            return SwapResult(success=False, error=str(e), error_code=e.code, mev_protected=mev)

        logger.info(f"Transaction confirmed: {tx_id}")
        return SwapResult(success=True, tx_id=tx_id, mev_protected=mev)

    async def _simulate(self, raw: bytes) -> None:
        try:
            value = await self.rpc.simulate_transaction(raw, commitment=self.commitment)
        except SolanaRpcError as e:
            raise SimulationUnavailableError(
                f"Simulation request failed, transaction not sent: {e}"
            ) from e

        if value.get("err") is not None:
            for line in value.get("logs") or []:
                logger.debug(f"simulation log: {line}")
            raise SimulationFailedError(value["err"])

        logger.info("Transaction simulation successful")

    async def _broadcast(self, raw: bytes) -> str:
        # Preflight runs again on the node; simulation above is our own gate
        try:
            tx_id = await self.rpc.send_raw_transaction(
                raw,
                skip_preflight=False,
                preflight_commitment=self.commitment,
            )
        except SolanaRpcError as e:
            raise BroadcastError(f"Transaction not sent: {e}") from e

        if not tx_id:
            raise BroadcastError("Transaction not sent: node returned no signature")

        logger.info(f"Transaction broadcast: {tx_id}")
        return tx_id

    async def _wait_for_confirmation(self, tx_id: str) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.confirm_timeout

        while True:
            try:
                status = await self.rpc.get_signature_status(tx_id)
            except SolanaRpcError as e:
                logger.warning(f"Signature status lookup failed for {tx_id}: {e}")
                status = None

            if status is not None:
                if status.get("err") is not None:
                    raise ConfirmationFailedError(
                        f"Transaction {tx_id} was sent but failed on-chain: {status['err']}",
                        tx_id=tx_id,
                    )
                if status.get("confirmationStatus") in CONFIRMED_STATUSES:
                    return

            if loop.time() >= deadline:
                raise ConfirmationTimeoutError(
                    f"Transaction {tx_id} was sent but not confirmed within "
                    f"{self.confirm_timeout:.0f}s",
                    tx_id=tx_id,
                )

            await asyncio.sleep(self.poll_interval)
