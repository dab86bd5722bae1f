"""OKX DEX aggregator integration for Solana.

Quotes and unsigned swap transactions come from the OKX aggregator REST
API; submission of user-signed transactions goes straight to a Solana
RPC node. The provider never signs transactions on behalf of users.

API docs: https://www.okx.com/web3/build/docs/waas/dex-get-quote
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from swapgate.trading import mock
from swapgate.trading.base import (
    DataSource,
    ProviderConfig,
    QuoteInput,
    QuoteResult,
    SubmitTransactionInput,
    SwapInput,
    SwapResult,
    TradingProvider,
    TransactionResult,
)
from swapgate.trading.errors import (
    AuthenticationError,
    TradingError,
    UpstreamAPIError,
    ValidationError,
)
from swapgate.trading.fees import PriorityFeeEstimator
from swapgate.trading.network import SolanaRpcClient
from swapgate.trading.signer import OkxRequestSigner, serialize_body
from swapgate.trading.submitter import TransactionSubmitter

logger = logging.getLogger(__name__)

QUOTE_PATH = "/api/v5/dex/aggregator/quote"
SWAP_PATH = "/api/v5/dex/aggregator/swap"


class OkxProvider(TradingProvider):
    """OKX DEX aggregator provider (platform mode: users sign their own transactions)."""

    def __init__(
        self,
        config: ProviderConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        rpc: Optional[SolanaRpcClient] = None,
    ):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.chain_id = config.chain_id
        self.signer = OkxRequestSigner(
            api_key=config.api_key,
            secret_key=config.secret_key,
            passphrase=config.api_passphrase,
            project_id=config.project_id,
        )
        self._http_client = http_client
        self.rpc = rpc or SolanaRpcClient(config.rpc_url, timeout=config.http_timeout)
        self.fee_estimator = PriorityFeeEstimator(
            self.rpc, floor=config.fee_floor, default=config.default_fee
        )
        self.submitter = TransactionSubmitter(
            self.rpc,
            confirm_timeout=config.confirm_timeout,
            poll_interval=config.confirm_poll_interval,
        )

        logger.info("OKX trading provider initialized (users sign their own transactions)")

    @property
    def name(self) -> str:
        return "okx"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.http_timeout)
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        await self.rpc.close()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        payload: Optional[dict] = None,
    ) -> dict:
        """Send a signed request to the aggregator.

        The signed path carries the encoded query string and the signed body
        is the exact string sent, so nothing is re-serialized after signing.

        Raises:
            AuthenticationError: on HTTP 401
            UpstreamAPIError: on any other HTTP or transport failure
        """
        method = method.upper()
        request_path = f"{path}?{urlencode(params)}" if params else path
        body = serialize_body(payload) if payload is not None else ""
        headers = self.signer.headers(method, request_path, body)

        client = await self._get_client()
        try:
            response = await client.request(
                method,
                f"{self.base_url}{request_path}",
                headers=headers,
                content=body or None,
            )
        except httpx.HTTPError as e:
            raise UpstreamAPIError(f"OKX request failed: {e}") from e

        if response.status_code == 401:
            raise AuthenticationError(f"OKX rejected credentials: {response.text[:200]}")

        if response.status_code != 200:
            raise UpstreamAPIError(
                f"OKX API error: HTTP {response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamAPIError(f"OKX returned invalid JSON: {e}") from e

    async def get_quote(self, request: QuoteInput) -> QuoteResult:
        """Get a swap quote. Falls back to mock data when credentials are rejected."""
        params = {
            "chainId": self.chain_id,
            "fromTokenAddress": request.from_token_address,
            "toTokenAddress": request.to_token_address,
            "amount": request.amount,
            "slippage": request.slippage,
        }

        try:
            data = await self._request("GET", QUOTE_PATH, params=params)
        except AuthenticationError as e:
            logger.warning(f"Using mock quote data (invalid API credentials): {e}")
            return QuoteResult(
                success=True,
                data=mock.mock_quote(request, chain_id=self.chain_id),
                source=DataSource.MOCK,
            )
        except TradingError as e:
            logger.error(f"Get quote failed: {e}")
            return QuoteResult(success=False, error=str(e), error_code=e.code)
        except Exception as e:
            logger.error(f"Get quote failed: {type(e).__name__}: {e}")
            return QuoteResult(
                success=False,
                error=str(e) or "Failed to get quote",
                error_code=TradingError.code,
            )

        logger.debug(f"Quote response: {data}")
        return QuoteResult(success=True, data=data)

    async def _resolve_priority_fee(self, request: SwapInput) -> int:
        if request.priority_fee:
            try:
                fee = int(request.priority_fee)
            except ValueError:
                raise ValidationError(
                    f"priorityFee must be an integer string, got {request.priority_fee!r}"
                )
            if fee < 0:
                raise ValidationError("priorityFee must not be negative")
            return fee
        return await self.fee_estimator.estimate(request.amount)

    async def build_transaction(self, request: SwapInput) -> TransactionResult:
        """Build an unsigned swap transaction for the user to sign."""
        mev = request.enable_mev_protection
        priority_fee: Optional[int] = None

        if request.enable_twap:
            logger.info("TWAP splitting requested; building a single transaction")

        try:
            priority_fee = await self._resolve_priority_fee(request)
            payload = {
                "chainId": self.chain_id,
                "fromTokenAddress": request.from_token_address,
                "toTokenAddress": request.to_token_address,
                "amount": request.amount,
                "slippage": request.slippage,
                "userWalletAddress": request.user_wallet_address,
                "priorityFee": str(priority_fee),
            }
            data = await self._request("POST", SWAP_PATH, payload=payload)
            call_data = self._extract_call_data(data)
        except AuthenticationError as e:
            logger.warning(f"Using mock transaction (invalid API credentials): {e}")
            transaction = mock.mock_transaction()
            logger.info(
                f"Mock transaction built for {request.amount} "
                f"{request.from_token_address} -> {request.to_token_address}"
            )
            return TransactionResult(
                success=True,
                transaction=transaction,
                mev_protected=mev,
                priority_fee=priority_fee,
                source=DataSource.MOCK,
            )
        except TradingError as e:
            logger.error(f"Build transaction failed: {e}")
            return TransactionResult(
                success=False, error=str(e), error_code=e.code, mev_protected=mev
            )
        except Exception as e:
            logger.error(f"Build transaction failed: {type(e).__name__}: {e}")
            return TransactionResult(
                success=False,
                error=str(e) or "An unknown error occurred",
                error_code=TradingError.code,
                mev_protected=mev,
            )

        return TransactionResult(
            success=True,
            transaction=call_data,
            mev_protected=mev,
            priority_fee=priority_fee,
        )

    @staticmethod
    def _extract_call_data(data: dict) -> str:
        """Pull the base64 unsigned transaction out of a swap response."""
        if str(data.get("code")) != "0":
            raise UpstreamAPIError(
                f"API Error: {data.get('msg') or 'unknown error'}",
                api_code=str(data.get("code")),
            )

        items = data.get("data") or []
        if not items:
            raise UpstreamAPIError("API Error: empty swap response")

        swap_data = items[0]
        call_data = swap_data.get("callData") or (swap_data.get("tx") or {}).get("data")
        if not call_data:
            raise UpstreamAPIError("API Error: swap response has no transaction data")
        return call_data

    async def submit_transaction(self, request: SubmitTransactionInput) -> SwapResult:
        """Simulate, broadcast and confirm a user-signed transaction."""
        return await self.submitter.submit(request)
