"""Unit tests for gas price queries and sweep amount calculation."""

import asyncio

import aiohttp
import pytest
from web3.exceptions import Web3Exception

from app.services.blockchain.fee_estimator import FeeEstimator, FeeQuote
from app.utils.exceptions import FeeUnavailableError


class TestCurrentFeeRate:
    """Test FeeEstimator.current_fee_rate()."""

    @pytest.mark.asyncio
    async def test_returns_gas_price(self, mock_web3, fake_eth):
        fake_eth.gas_price_value = 25 * 10**9
        assert await FeeEstimator(mock_web3).current_fee_rate() == 25 * 10**9

    @pytest.mark.asyncio
    async def test_provider_error_is_unavailable(self, mock_web3, fake_eth):
        fake_eth.gas_price_value = Web3Exception("rpc down")
        with pytest.raises(FeeUnavailableError):
            await FeeEstimator(mock_web3).current_fee_rate()

    @pytest.mark.asyncio
    async def test_connection_error_is_unavailable(self, mock_web3, fake_eth):
        fake_eth.gas_price_value = ConnectionError("refused")
        with pytest.raises(FeeUnavailableError):
            await FeeEstimator(mock_web3).current_fee_rate()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            aiohttp.ServerDisconnectedError(),
            aiohttp.ClientPayloadError("truncated"),
            RuntimeError("unexpected provider failure"),
        ],
    )
    async def test_other_provider_errors_are_unavailable(
        self, mock_web3, fake_eth, error
    ):
        fake_eth.gas_price_value = error
        with pytest.raises(FeeUnavailableError):
            await FeeEstimator(mock_web3).current_fee_rate()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, 0, -1])
    async def test_empty_price_is_unavailable(self, mock_web3, fake_eth, value):
        fake_eth.gas_price_value = value
        with pytest.raises(FeeUnavailableError):
            await FeeEstimator(mock_web3).current_fee_rate()

    @pytest.mark.asyncio
    @pytest.mark.slow
    async def test_timeout_is_unavailable(self, mock_web3, fake_eth, monkeypatch):
        async def never():
            await asyncio.sleep(10)

        monkeypatch.setattr(type(fake_eth), "gas_price", property(lambda self: never()))
        with pytest.raises(FeeUnavailableError):
            await FeeEstimator(mock_web3, timeout=0.05).current_fee_rate()


class TestMaxSweepable:
    """Test sweep amount calculation."""

    def test_quote_total_cost(self):
        quote = FeeQuote(rate=20 * 10**9, gas_budget=21000)
        assert quote.total_cost == 420_000 * 10**9

    def test_sweepable_positive(self):
        quote = FeeQuote(rate=10, gas_budget=21000)
        assert quote.sweepable(1_000_000) == 1_000_000 - 210_000

    def test_sweepable_zero_and_negative(self):
        quote = FeeQuote(rate=10, gas_budget=21000)
        assert quote.sweepable(210_000) == 0
        assert quote.sweepable(100_000) == -110_000

    @pytest.mark.asyncio
    async def test_max_sweepable_uses_current_rate(self, mock_web3, fake_eth):
        fake_eth.gas_price_value = 100
        estimator = FeeEstimator(mock_web3)

        assert await estimator.max_sweepable(10_000_000, 21000) == 10_000_000 - 2_100_000

    @pytest.mark.asyncio
    async def test_estimate_fee(self, mock_web3, fake_eth):
        fake_eth.gas_price_value = 7
        quote = await FeeEstimator(mock_web3).estimate_fee(21000)
        assert quote == FeeQuote(rate=7, gas_budget=21000)
