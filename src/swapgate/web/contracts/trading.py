"""Request and response contracts for the swap endpoints.

Field names on the wire are camelCase. Required swap fields are declared
optional here so that missing parameters produce the gateway's own 400
envelope instead of a framework 422.
"""

import re
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from swapgate.trading.base import (
    QuoteInput,
    QuoteResult,
    SubmitTransactionInput,
    SwapInput,
    SwapResult,
    TransactionResult,
)
from swapgate.trading.errors import ValidationError

REQUIRED_SWAP_FIELDS = (
    "fromTokenAddress",
    "toTokenAddress",
    "amount",
    "slippage",
    "userWalletAddress",
)
MISSING_SWAP_FIELDS_MESSAGE = "Missing required parameters: " + ", ".join(REQUIRED_SWAP_FIELDS)
MISSING_SIGNED_TX_MESSAGE = "Missing required parameter: signedTransaction"


_DIGITS = re.compile(r"[0-9]+")


def _validate_amount(amount: str) -> None:
    if not _DIGITS.fullmatch(amount):
        raise ValidationError(
            f"Invalid parameter amount: expected a non-negative integer string, got {amount!r}"
        )


def _normalize_priority_fee(value: Optional[Union[int, str]]) -> Optional[str]:
    """Priority fee as a lamport string, or None to let the provider estimate one."""
    if value is None or value == "":
        return None
    text = str(value)
    if isinstance(value, bool) or not _DIGITS.fullmatch(text):
        raise ValidationError(
            f"Invalid parameter priorityFee: expected a non-negative integer, got {value!r}"
        )
    return text


class QuoteRequest(BaseModel):
    """Quote parameters (query string of GET /api/quote)."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    from_token_address: Optional[str] = Field(None, alias="fromTokenAddress")
    to_token_address: Optional[str] = Field(None, alias="toTokenAddress")
    amount: Optional[str] = Field(None, description="Amount in the smallest unit of fromToken")
    slippage: Optional[str] = Field(None, description="Slippage tolerance in percent")
    user_wallet_address: Optional[str] = Field(None, alias="userWalletAddress")

    def _check_required(self) -> None:
        values = (
            self.from_token_address,
            self.to_token_address,
            self.amount,
            self.slippage,
            self.user_wallet_address,
        )
        if not all(values):
            raise ValidationError(MISSING_SWAP_FIELDS_MESSAGE)
        _validate_amount(self.amount)

    def to_input(self) -> QuoteInput:
        """Validate and convert to the provider input type.

        Raises:
            ValidationError: a required field is missing or amount is malformed
        """
        self._check_required()
        return QuoteInput(
            from_token_address=self.from_token_address,
            to_token_address=self.to_token_address,
            amount=self.amount,
            slippage=self.slippage,
            user_wallet_address=self.user_wallet_address,
        )


class BuildTransactionRequest(QuoteRequest):
    """Body of POST /api/build-transaction."""

    enable_mev_protection: Optional[bool] = Field(False, alias="enableMevProtection")
    priority_fee: Optional[Union[int, str]] = Field(
        None, alias="priorityFee", description="Priority fee in lamports"
    )
    enable_twap: Optional[bool] = Field(False, alias="enableTwap")

    def to_input(self) -> SwapInput:
        self._check_required()
        priority_fee = _normalize_priority_fee(self.priority_fee)
        return SwapInput(
            from_token_address=self.from_token_address,
            to_token_address=self.to_token_address,
            amount=self.amount,
            slippage=self.slippage,
            user_wallet_address=self.user_wallet_address,
            enable_mev_protection=bool(self.enable_mev_protection),
            priority_fee=priority_fee,
            enable_twap=bool(self.enable_twap),
        )


class SubmitTransactionRequest(BaseModel):
    """Body of POST /api/submit-transaction."""

    model_config = ConfigDict(populate_by_name=True)

    signed_transaction: Optional[str] = Field(
        None, alias="signedTransaction", description="Base64 user-signed transaction"
    )
    enable_mev_protection: Optional[bool] = Field(False, alias="enableMevProtection")

    def to_input(self) -> SubmitTransactionInput:
        if not self.signed_transaction:
            raise ValidationError(MISSING_SIGNED_TX_MESSAGE)
        return SubmitTransactionInput(
            signed_transaction=self.signed_transaction,
            enable_mev_protection=bool(self.enable_mev_protection),
        )


class ErrorResponse(BaseModel):
    """Error envelope shared by all swap endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    error: str
    error_code: Optional[str] = Field(None, alias="errorCode")


class QuoteResponse(BaseModel):
    """Quote envelope. ``source`` is "mock" when data is synthetic."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    data: Optional[Any] = None
    source: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = Field(None, alias="errorCode")

    @classmethod
    def from_result(cls, result: QuoteResult) -> "QuoteResponse":
        return cls(
            success=result.success,
            data=result.data,
            source=result.source.value if result.success else None,
            error=result.error,
            error_code=result.error_code,
        )


class BuildTransactionResponse(BaseModel):
    """Unsigned transaction envelope for client-side signing."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    transaction: Optional[str] = Field(None, description="Base64 unsigned transaction")
    mev_protected: bool = Field(False, alias="mevProtected")
    priority_fee: Optional[int] = Field(None, alias="priorityFee")
    source: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = Field(None, alias="errorCode")

    @classmethod
    def from_result(cls, result: TransactionResult) -> "BuildTransactionResponse":
        return cls(
            success=result.success,
            transaction=result.transaction,
            mev_protected=result.mev_protected,
            priority_fee=result.priority_fee,
            source=result.source.value if result.success else None,
            error=result.error,
            error_code=result.error_code,
        )


class SubmitTransactionResponse(BaseModel):
    """Submission envelope. ``txId`` is present only on success."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    tx_id: Optional[str] = Field(None, alias="txId")
    mev_protected: bool = Field(False, alias="mevProtected")
    source: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = Field(None, alias="errorCode")

    @classmethod
    def from_result(cls, result: SwapResult) -> "SubmitTransactionResponse":
        return cls(
            success=result.success,
            tx_id=result.tx_id if result.success else None,
            mev_protected=result.mev_protected,
            source=result.source.value if result.success else None,
            error=result.error,
            error_code=result.error_code,
        )
