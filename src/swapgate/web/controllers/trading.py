"""Swap workflow endpoints.

quote -> build-transaction -> (client signs) -> submit-transaction.
The server never signs; it only relays already-signed transactions.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from swapgate.trading.base import TradingProvider
from swapgate.trading.errors import ValidationError
from swapgate.trading.factory import get_provider
from swapgate.web.contracts.trading import (
    BuildTransactionRequest,
    BuildTransactionResponse,
    ErrorResponse,
    QuoteRequest,
    QuoteResponse,
    SubmitTransactionRequest,
    SubmitTransactionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trading"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or malformed parameters"},
    500: {"model": ErrorResponse, "description": "Upstream or network failure"},
}


def _error(status_code: int, message: str, code: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=message, error_code=code)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def _respond(body, success: bool) -> JSONResponse:
    if success:
        status_code = 200
    elif body.error_code == ValidationError.code:
        status_code = 400
    else:
        status_code = 500
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.get("/quote", response_model=QuoteResponse, responses=ERROR_RESPONSES)
async def get_quote(
    from_token_address: Optional[str] = Query(None, alias="fromTokenAddress"),
    to_token_address: Optional[str] = Query(None, alias="toTokenAddress"),
    amount: Optional[str] = Query(None),
    slippage: Optional[str] = Query(None),
    user_wallet_address: Optional[str] = Query(None, alias="userWalletAddress"),
    provider: TradingProvider = Depends(get_provider),
):
    """Get a swap quote. READ-ONLY - nothing is built or executed."""
    query = QuoteRequest(
        from_token_address=from_token_address,
        to_token_address=to_token_address,
        amount=amount,
        slippage=slippage,
        user_wallet_address=user_wallet_address,
    )
    try:
        request = query.to_input()
    except ValidationError as e:
        return _error(400, str(e), e.code)

    try:
        result = await provider.get_quote(request)
    except Exception as e:
        logger.exception("Quote API error")
        return _error(500, str(e) or "Internal server error")

    return _respond(QuoteResponse.from_result(result), result.success)


@router.post(
    "/build-transaction",
    response_model=BuildTransactionResponse,
    responses=ERROR_RESPONSES,
)
async def build_transaction(
    body: BuildTransactionRequest,
    provider: TradingProvider = Depends(get_provider),
):
    """Build an unsigned transaction for client-side signing.

    The client must:
    1. Sign the returned base64 transaction with their own wallet
    2. Send it back via /api/submit-transaction
    """
    try:
        request = body.to_input()
    except ValidationError as e:
        return _error(400, str(e), e.code)

    try:
        result = await provider.build_transaction(request)
    except Exception as e:
        logger.exception("Build transaction API error")
        return _error(500, str(e) or "Internal server error")

    return _respond(BuildTransactionResponse.from_result(result), result.success)


@router.post(
    "/submit-transaction",
    response_model=SubmitTransactionResponse,
    responses=ERROR_RESPONSES,
)
async def submit_transaction(
    body: SubmitTransactionRequest,
    provider: TradingProvider = Depends(get_provider),
):
    """Simulate, broadcast and confirm a user-signed transaction."""
    try:
        request = body.to_input()
    except ValidationError as e:
        return _error(400, str(e), e.code)

    try:
        result = await provider.submit_transaction(request)
    except Exception as e:
        logger.exception("Submit transaction API error")
        return _error(500, str(e) or "Internal server error")

    return _respond(SubmitTransactionResponse.from_result(result), result.success)
