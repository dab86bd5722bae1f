"""Priority fee estimation for pending swaps.

The estimate is best-effort: any failure yields the default fee so a
swap is never blocked on fee sampling.
"""

import logging

from swapgate.trading.errors import FeeEstimationError
from swapgate.trading.network import SolanaRpcClient

logger = logging.getLogger(__name__)

MIN_PRIORITY_FEE = 1000  # lamports
DEFAULT_PRIORITY_FEE = 5000  # lamports

LARGE_TRADE_THRESHOLD = 1_000_000
MEDIUM_TRADE_THRESHOLD = 100_000


def size_multiplier(amount: str) -> int:
    """Fee multiplier for a trade size.

    Thresholds apply to the raw smallest-unit amount with no decimal
    normalization, so the same raw amount is treated alike for tokens
    with different decimals.
    """
    value = float(amount)
    if value > LARGE_TRADE_THRESHOLD:
        return 3
    if value > MEDIUM_TRADE_THRESHOLD:
        return 2
    return 1


class PriorityFeeEstimator:
    """Computes a priority fee from recent network fee samples and trade size."""

    def __init__(
        self,
        rpc: SolanaRpcClient,
        floor: int = MIN_PRIORITY_FEE,
        default: int = DEFAULT_PRIORITY_FEE,
    ):
        self.rpc = rpc
        self.floor = floor
        self.default = default

    async def _average_recent_fee(self) -> float:
        try:
            samples = await self.rpc.get_recent_prioritization_fees()
        except Exception as e:
            raise FeeEstimationError(f"Failed to fetch priority fees: {e}") from e

        if not samples:
            raise FeeEstimationError("Empty priority fee sample")

        return sum(samples) / len(samples)

    async def estimate(self, amount: str) -> int:
        """Estimate the priority fee (lamports) for a trade of ``amount``."""
        try:
            average = await self._average_recent_fee()
            multiplier = size_multiplier(amount)
        except (FeeEstimationError, ValueError) as e:
            logger.warning(f"Failed to calculate priority fee, using default {self.default}: {e}")
            return self.default

        fee = max(average * multiplier, self.floor)
        logger.debug(
            f"Priority fee: avg={average:.1f} x{multiplier} -> {fee:.0f} (amount={amount})"
        )
        return int(fee)
