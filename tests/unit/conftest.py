"""
Shared fixtures for unit tests.

This module provides:
- FakeEth: awaitable stand-in for AsyncWeb3.eth
- mock_web3: web3 object wired to a FakeEth
- pending_payment: a payment freshly created in a ledger
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


class FakeEth:
    """
    Minimal AsyncWeb3.eth replacement.

    gas_price and chain_id are awaitable properties like the real ones;
    assign an exception to make them raise.
    """

    def __init__(self, gas_price=10**9, chain_id=1, nonce=0, receipt_status=1):
        self.gas_price_value = gas_price
        self.chain_id_value = chain_id
        self.get_transaction_count = AsyncMock(return_value=nonce)
        self.send_raw_transaction = AsyncMock(return_value=b"\x11" * 32)
        self.wait_for_transaction_receipt = AsyncMock(
            return_value={"status": receipt_status, "blockNumber": 123, "gasUsed": 21000}
        )

    @staticmethod
    async def _resolve(value):
        if isinstance(value, BaseException):
            raise value
        return value

    @property
    def gas_price(self):
        return self._resolve(self.gas_price_value)

    @property
    def chain_id(self):
        return self._resolve(self.chain_id_value)


@pytest.fixture
def fake_eth():
    return FakeEth()


@pytest.fixture
def mock_web3(fake_eth):
    """Mock web3 exposing fake_eth."""
    web3 = MagicMock()
    web3.eth = fake_eth
    return web3


@pytest.fixture
def pending_payment(ledger):
    """Create a 0.05 ETH payment and return its internal record."""
    receipt = ledger.create("order-1", "0.05")
    return ledger.get(receipt.payment_id)
