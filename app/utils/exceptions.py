"""
Exception types.

Expected outcomes of balance checks and sweeps are modelled as result
objects; exceptions are reserved for contract violations and provider
failures.
"""

import aiohttp
from web3.exceptions import Web3Exception


class PaymentError(Exception):
    """Base class for payment lifecycle errors."""
    pass


class PaymentNotFoundError(PaymentError):
    """Raised when a payment id is not present in the ledger."""

    def __init__(self, payment_id: str) -> None:
        super().__init__(f"Payment {payment_id} not found")
        self.payment_id = payment_id


class InvalidStatusTransitionError(PaymentError):
    """Raised when a status change would leave a terminal state."""

    def __init__(self, payment_id: str, current: str, requested: str) -> None:
        super().__init__(
            f"Payment {payment_id}: cannot transition {current} -> {requested}"
        )
        self.payment_id = payment_id
        self.current = current
        self.requested = requested


class FeeUnavailableError(PaymentError):
    """Raised when the chain cannot supply a gas price."""
    pass


# Errors a chain RPC call is expected to surface
RPC_ERRORS = (
    Web3Exception,
    aiohttp.ClientError,  # HTTP provider: 5xx responses, disconnects
    OSError,  # includes ConnectionError and TimeoutError
    ValueError,
)
