"""Tests for priority fee estimation."""

import pytest

from conftest import FakeRpc
from swapgate.trading.fees import (
    DEFAULT_PRIORITY_FEE,
    MIN_PRIORITY_FEE,
    PriorityFeeEstimator,
    size_multiplier,
)
from swapgate.trading.network import SolanaRpcError


class TestSizeMultiplier:
    """Tests for the trade-size multiplier."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            ("1500000", 3),
            ("1000001", 3),
            ("1000000", 2),
            ("150000", 2),
            ("100001", 2),
            ("100000", 1),
            ("1000", 1),
            ("0", 1),
        ],
    )
    def test_thresholds_are_strict(self, amount, expected):
        assert size_multiplier(amount) == expected


class TestPriorityFeeEstimator:
    """Tests for PriorityFeeEstimator."""

    @pytest.mark.asyncio
    async def test_mean_times_multiplier(self):
        rpc = FakeRpc(fees=[2000, 4000, 6000])  # mean 4000
        estimator = PriorityFeeEstimator(rpc)

        assert await estimator.estimate("1500000") == 12000
        assert await estimator.estimate("150000") == 8000
        assert await estimator.estimate("1000") == 4000

    @pytest.mark.asyncio
    async def test_floor_applies(self):
        rpc = FakeRpc(fees=[0, 0, 300])  # mean 100
        estimator = PriorityFeeEstimator(rpc)

        assert await estimator.estimate("150000") == MIN_PRIORITY_FEE

    @pytest.mark.asyncio
    async def test_fetch_failure_returns_default(self):
        rpc = FakeRpc(fee_error=SolanaRpcError("node unavailable"))
        estimator = PriorityFeeEstimator(rpc)

        assert await estimator.estimate("1500000") == DEFAULT_PRIORITY_FEE == 5000

    @pytest.mark.asyncio
    async def test_empty_sample_returns_default(self):
        estimator = PriorityFeeEstimator(FakeRpc(fees=[]))

        assert await estimator.estimate("1000") == DEFAULT_PRIORITY_FEE

    @pytest.mark.asyncio
    async def test_unparseable_amount_returns_default(self):
        estimator = PriorityFeeEstimator(FakeRpc(fees=[5000]))

        assert await estimator.estimate("not-a-number") == DEFAULT_PRIORITY_FEE

    @pytest.mark.asyncio
    async def test_custom_floor_and_default(self):
        estimator = PriorityFeeEstimator(FakeRpc(fees=[]), floor=10, default=42)
        assert await estimator.estimate("1") == 42

        estimator = PriorityFeeEstimator(FakeRpc(fees=[1]), floor=10, default=42)
        assert await estimator.estimate("1") == 10
