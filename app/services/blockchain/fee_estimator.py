"""
Fee Estimator.

Provides gas price queries and sweep amount calculation for native
transfers.
"""

import asyncio
from dataclasses import dataclass

from loguru import logger
from web3 import AsyncWeb3

from app.config.constants import BLOCKCHAIN_TIMEOUT
from app.utils.exceptions import RPC_ERRORS, FeeUnavailableError


@dataclass(frozen=True)
class FeeQuote:
    """Gas price and the cost of a fixed gas budget, in wei."""

    rate: int
    gas_budget: int

    @property
    def total_cost(self) -> int:
        return self.rate * self.gas_budget

    def sweepable(self, balance: int) -> int:
        """Balance left after paying the fee; may be negative."""
        return balance - self.total_cost


class FeeEstimator:
    """
    Estimates network fees for sweep transactions.

    Features:
    - Gas price queries with timeout
    - Maximum sweepable amount for a fixed gas budget
    """

    def __init__(self, web3: AsyncWeb3, timeout: float = BLOCKCHAIN_TIMEOUT):
        """
        Initialize fee estimator.

        Args:
            web3: AsyncWeb3 instance
            timeout: Seconds to wait for the RPC provider
        """
        self.web3 = web3
        self.timeout = timeout

    async def current_fee_rate(self) -> int:
        """
        Get the current gas price.

        Returns:
            Gas price in wei

        Raises:
            FeeUnavailableError: If the provider cannot supply a price
        """
        try:
            gas_price_wei = await asyncio.wait_for(
                self.web3.eth.gas_price,
                timeout=self.timeout,
            )
        except TimeoutError as e:
            logger.error("Timeout getting gas price")
            raise FeeUnavailableError("Timeout getting gas price") from e
        except RPC_ERRORS as e:
            logger.error(f"Could not retrieve gas price: {e}")
            raise FeeUnavailableError(f"Could not retrieve gas price: {e}") from e
        except Exception as e:
            logger.exception(f"Unexpected error getting gas price: {e}")
            raise FeeUnavailableError(f"Could not retrieve gas price: {e}") from e

        if not gas_price_wei or gas_price_wei <= 0:
            logger.error(f"Provider returned unusable gas price: {gas_price_wei!r}")
            raise FeeUnavailableError("Could not retrieve gas price")

        return int(gas_price_wei)

    async def estimate_fee(self, gas_budget: int) -> FeeQuote:
        """
        Quote the cost of spending gas_budget at the current rate.

        Raises:
            FeeUnavailableError: If the provider cannot supply a price
        """
        rate = await self.current_fee_rate()
        return FeeQuote(rate=rate, gas_budget=gas_budget)

    async def max_sweepable(self, balance: int, gas_budget: int) -> int:
        """
        Largest amount that can leave an address holding balance.

        Negative when the balance cannot cover the fee.

        Raises:
            FeeUnavailableError: If the provider cannot supply a price
        """
        quote = await self.estimate_fee(gas_budget)
        return quote.sweepable(balance)
