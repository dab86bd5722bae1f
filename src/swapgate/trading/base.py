"""Abstract trading provider interface and workflow data types.

Flow: get_quote -> build_transaction -> (user signs off-system) ->
submit_transaction. Providers never hold user private keys; they only
ever see already-signed transactions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from swapgate.config import Settings


class DataSource(str, Enum):
    """Where a result came from."""

    LIVE = "live"  # Real aggregator / network response
    MOCK = "mock"  # Synthetic data produced by the credential-less fallback


@dataclass
class QuoteInput:
    """Request for a swap quote. Amount is in the smallest unit of from_token."""

    from_token_address: str
    to_token_address: str
    amount: str
    slippage: str  # Percent, e.g. "0.5"
    user_wallet_address: str


@dataclass
class SwapInput(QuoteInput):
    """Request to build an unsigned swap transaction."""

    enable_mev_protection: bool = False
    priority_fee: Optional[str] = None  # Lamports; estimated when omitted
    enable_twap: bool = False


@dataclass
class SubmitTransactionInput:
    """A user-signed transaction (base64) ready for broadcast."""

    signed_transaction: str
    enable_mev_protection: bool = False


@dataclass
class QuoteResult:
    """Outcome of a quote request. ``data`` is the aggregator payload as-is."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    source: DataSource = DataSource.LIVE

    @property
    def is_mock(self) -> bool:
        return self.source == DataSource.MOCK


@dataclass
class TransactionResult:
    """Outcome of building an unsigned transaction."""

    success: bool
    transaction: Optional[str] = None  # Base64 unsigned transaction
    error: Optional[str] = None
    error_code: Optional[str] = None
    mev_protected: bool = False
    priority_fee: Optional[int] = None
    source: DataSource = DataSource.LIVE

    @property
    def is_mock(self) -> bool:
        return self.source == DataSource.MOCK


@dataclass
class SwapResult:
    """Outcome of submitting a signed transaction."""

    success: bool
    tx_id: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    mev_protected: bool = False
    source: DataSource = DataSource.LIVE

    @property
    def is_mock(self) -> bool:
        return self.source == DataSource.MOCK


@dataclass
class ProviderConfig:
    """Process-wide credentials and connection settings for a provider.

    Built once at startup and passed into the provider constructor.
    """

    api_key: str
    secret_key: str
    api_passphrase: str
    project_id: str
    rpc_url: str = "https://api.mainnet-beta.solana.com"
    base_url: str = "https://www.okx.com"
    chain_id: str = "501"
    http_timeout: float = 30.0
    confirm_timeout: float = 60.0
    confirm_poll_interval: float = 0.5
    fee_floor: int = 1000
    default_fee: int = 5000

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderConfig":
        return cls(
            api_key=settings.okx_api_key,
            secret_key=settings.okx_secret_key,
            api_passphrase=settings.okx_api_passphrase,
            project_id=settings.okx_project_id,
            rpc_url=settings.sol_rpc_url,
            base_url=settings.okx_base_url,
            chain_id=settings.okx_chain_id,
            http_timeout=settings.http_timeout_seconds,
            confirm_timeout=settings.confirm_timeout_seconds,
            confirm_poll_interval=settings.confirm_poll_interval_seconds,
            fee_floor=settings.priority_fee_floor,
            default_fee=settings.default_priority_fee,
        )


class TradingProvider(ABC):
    """Abstract base class for trading providers.

    Implementations must not raise past these methods: every failure is
    reported as a result with ``success=False``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier."""
        pass

    @abstractmethod
    async def get_quote(self, request: QuoteInput) -> QuoteResult:
        """Fetch a price quote for a token pair and amount."""
        pass

    @abstractmethod
    async def build_transaction(self, request: SwapInput) -> TransactionResult:
        """
        Build an unsigned swap transaction for client-side signing.

        Args:
            request: Swap parameters, optionally with an explicit priority fee

        Returns:
            TransactionResult with the base64 transaction to be signed
        """
        pass

    @abstractmethod
    async def submit_transaction(self, request: SubmitTransactionInput) -> SwapResult:
        """
        Simulate, broadcast and confirm a user-signed transaction.

        Args:
            request: Base64 signed transaction

        Returns:
            SwapResult with the network transaction id on success
        """
        pass

    async def close(self) -> None:
        """Release network resources held by the provider."""
        return None
