"""
Blockchain services module.

Chain-facing components of the payment lifecycle:
- address_minter.py - Disposable key pair generation
- balance_oracle.py - Balance lookups through the Etherscan API
- fee_estimator.py - Gas price queries and sweep amount calculation
- fund_forwarder.py - Sweep transaction building, signing and confirmation
- web3_client.py - AsyncWeb3 client factory
"""

from .address_minter import AddressMinter
from .balance_oracle import (
    BalanceOracle,
    BalanceResult,
    Found,
    NotFound,
    RateLimited,
    TransientError,
)
from .fee_estimator import FeeEstimator, FeeQuote
from .fund_forwarder import (
    Failed,
    Forwarded,
    ForwardOutcome,
    FundForwarder,
    InsufficientForFee,
)
from .web3_client import close_web3, create_web3


__all__ = [
    "AddressMinter",
    "BalanceOracle",
    "BalanceResult",
    "Failed",
    "FeeEstimator",
    "FeeQuote",
    "Forwarded",
    "ForwardOutcome",
    "Found",
    "FundForwarder",
    "InsufficientForFee",
    "NotFound",
    "RateLimited",
    "TransientError",
    "close_web3",
    "create_web3",
]
