"""Error taxonomy for the swap workflow.

Every error carries a stable ``code`` that is surfaced to HTTP clients
next to the human-readable message.
"""

from typing import Any, Optional


class TradingError(Exception):
    """Base class for all swap workflow errors."""

    code = "trading_error"


class ValidationError(TradingError):
    """Missing or malformed caller input."""

    code = "validation_error"


class ProviderConfigError(TradingError):
    """Unknown trading provider or incomplete provider configuration."""

    code = "provider_config"


class AuthenticationError(TradingError):
    """The aggregator rejected our credentials (HTTP 401)."""

    code = "authentication_failed"


class UpstreamAPIError(TradingError):
    """The aggregator returned an error status or a non-zero API code."""

    code = "upstream_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        api_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.api_code = api_code


class FeeEstimationError(TradingError):
    """Priority fee sampling failed. Never leaves the fee estimator."""

    code = "fee_estimation_failed"


class TransactionDecodeError(TradingError):
    """The signed transaction could not be decoded."""

    code = "decode_error"


class SimulationFailedError(TradingError):
    """Simulation reported an error; the transaction was not sent."""

    code = "simulation_failed"

    def __init__(self, err: Any):
        super().__init__(f"Transaction simulation failed: {err}")
        self.err = err


class SimulationUnavailableError(TradingError):
    """The simulation request itself failed; the transaction was not sent."""

    code = "simulation_unavailable"


class BroadcastError(TradingError):
    """The network refused the transaction at send time."""

    code = "broadcast_failed"


class ConfirmationFailedError(TradingError):
    """The transaction was sent but failed on-chain."""

    code = "confirmation_failed"

    def __init__(self, message: str, tx_id: Optional[str] = None):
        super().__init__(message)
        self.tx_id = tx_id


class ConfirmationTimeoutError(ConfirmationFailedError):
    """The transaction was sent but did not reach the commitment level in time."""

    code = "confirmation_timeout"
