"""Request and response contracts for the web layer."""

from swapgate.web.contracts.trading import (
    BuildTransactionRequest,
    BuildTransactionResponse,
    ErrorResponse,
    QuoteRequest,
    QuoteResponse,
    SubmitTransactionRequest,
    SubmitTransactionResponse,
)

__all__ = [
    "BuildTransactionRequest",
    "BuildTransactionResponse",
    "ErrorResponse",
    "QuoteRequest",
    "QuoteResponse",
    "SubmitTransactionRequest",
    "SubmitTransactionResponse",
]
