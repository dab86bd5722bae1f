"""Synthetic quote, transaction and transaction-id generators.

Used when the aggregator rejects our credentials so the full
quote -> build -> submit flow can still be exercised end to end.
Everything produced here is tagged ``DataSource.MOCK`` by the caller.
"""

import base64
import binascii
import secrets
import string
import time

from swapgate.trading.base import QuoteInput

MOCK_TRANSACTION_PREFIX = b"mock_transaction_"
MOCK_TX_ID_PREFIX = "mock_tx_"
MOCK_TO_TOKEN_AMOUNT = "1000"
MOCK_ESTIMATED_GAS = "5000"

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

_ALPHABET = string.ascii_lowercase + string.digits


def _random_suffix(length: int = 9) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def _unique_tag() -> str:
    return f"{time.time_ns() // 1_000_000}_{_random_suffix()}"


def mock_quote(request: QuoteInput, chain_id: str = "501") -> dict:
    """Quote shaped like an aggregator response, echoing the request."""
    return {
        "code": "0",
        "msg": "success",
        "data": [
            {
                "chainId": chain_id,
                "fromToken": {
                    "tokenContractAddress": request.from_token_address,
                    "symbol": "SOL" if request.from_token_address == SOL_MINT else "TOKEN",
                    "decimals": 9,
                },
                "toToken": {
                    "tokenContractAddress": request.to_token_address,
                    "symbol": "USDC" if request.to_token_address == USDC_MINT else "TOKEN",
                    "decimals": 6,
                },
                "fromTokenAmount": request.amount,
                "toTokenAmount": MOCK_TO_TOKEN_AMOUNT,
                "estimatedGas": MOCK_ESTIMATED_GAS,
                "routerResult": {
                    "routes": [
                        {
                            "subRoutes": [
                                {
                                    "from": request.from_token_address,
                                    "to": request.to_token_address,
                                    "percentage": 100,
                                }
                            ]
                        }
                    ]
                },
            }
        ],
    }


def mock_transaction() -> str:
    """Base64 blob that can never decode as a real transaction."""
    payload = MOCK_TRANSACTION_PREFIX + _unique_tag().encode("ascii")
    return base64.b64encode(payload).decode("ascii")


def mock_tx_id() -> str:
    """Transaction id of the form mock_tx_<millis>_<random>."""
    return f"{MOCK_TX_ID_PREFIX}{_unique_tag()}"


def is_mock_transaction(encoded: str) -> bool:
    """Check whether a base64 payload was produced by mock_transaction()."""
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return False
    return raw.startswith(MOCK_TRANSACTION_PREFIX)
