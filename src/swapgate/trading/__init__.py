"""Swap workflow: quote, build unsigned transaction, submit signed transaction."""

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
from swapgate.trading.factory import get_provider, get_trading_provider

__all__ = [
    "DataSource",
    "ProviderConfig",
    "QuoteInput",
    "QuoteResult",
    "SubmitTransactionInput",
    "SwapInput",
    "SwapResult",
    "TradingProvider",
    "TransactionResult",
    "get_provider",
    "get_trading_provider",
]
