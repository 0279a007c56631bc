"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for Settings()
os.environ.setdefault("MASTER_ADDRESS", "0x742d35Cc6634C0532925a3b844Bc454e4438f44e")
os.environ.setdefault("RPC_URL", "https://rpc.example.org/")
os.environ.setdefault("ETHERSCAN_API_KEY", "test_etherscan_key")
os.environ.setdefault("POLLING_INTERVAL", "30000")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from app.services.blockchain.balance_oracle import Found, NotFound  # noqa: E402
from app.services.blockchain.fund_forwarder import Forwarded  # noqa: E402
from app.services.payment_ledger import PaymentLedger  # noqa: E402
from app.utils.validation import eth_to_wei  # noqa: E402


MASTER_ADDRESS = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
SAMPLE_TX_HASH = "0x" + "ab" * 32


@pytest.fixture
def master_address():
    """Checksummed sweep destination."""
    return MASTER_ADDRESS


@pytest.fixture
def sample_transaction_hash():
    """Sample transaction hash for testing."""
    return SAMPLE_TX_HASH


@pytest.fixture
def ledger():
    """Empty payment ledger with a real address minter."""
    return PaymentLedger()


@pytest.fixture
def mock_oracle():
    """BalanceOracle stand-in reporting no data by default."""
    oracle = MagicMock()
    oracle.check_balance = AsyncMock(return_value=NotFound())
    oracle.close = AsyncMock()
    return oracle


@pytest.fixture
def mock_forwarder(sample_transaction_hash):
    """FundForwarder stand-in that always succeeds."""
    forwarder = MagicMock()
    forwarder.forward = AsyncMock(return_value=Forwarded(sample_transaction_hash))
    return forwarder


@pytest.fixture
def funded():
    """Build a Found result from an ETH amount string."""
    def _funded(amount_eth: str) -> Found:
        return Found(eth_to_wei(amount_eth))
    return _funded
