"""
Payment Monitor Task.

Checks every pending payment for incoming funds and sweeps funded ones to
the master address. Runs on every scheduler tick.
"""

from dataclasses import dataclass

from loguru import logger

from app.models.payment import Payment, PaymentStatus
from app.services.blockchain.balance_oracle import (
    BalanceOracle,
    Found,
    RateLimited,
    TransientError,
)
from app.services.blockchain.fund_forwarder import (
    Failed,
    Forwarded,
    FundForwarder,
    InsufficientForFee,
)
from app.services.payment_ledger import PaymentLedger
from app.utils.exceptions import PaymentError
from app.utils.security import mask_address
from app.utils.validation import eth_to_wei, wei_to_eth


@dataclass
class TickStats:
    """Counters for one monitoring tick."""

    checked: int = 0
    funded: int = 0
    completed: int = 0
    failed: int = 0
    rate_limited: int = 0
    errors: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "checked": self.checked,
            "funded": self.funded,
            "completed": self.completed,
            "failed": self.failed,
            "rate_limited": self.rate_limited,
            "errors": self.errors,
        }


def is_funded(balance_wei: int, expected_amount: str) -> bool:
    """A payment is funded when its address holds at least the expected amount."""
    return balance_wei > 0 and balance_wei >= eth_to_wei(expected_amount)


async def check_pending_payments(
    ledger: PaymentLedger,
    oracle: BalanceOracle,
    forwarder: FundForwarder,
) -> TickStats:
    """
    Run one monitoring pass over all pending payments.

    Payments are processed one at a time in creation order. A failure
    while handling one payment never stops the pass.

    Returns:
        TickStats for the pass
    """
    stats = TickStats()
    pending = ledger.list_pending()

    if not pending:
        return stats

    logger.info(f"Checking {len(pending)} pending payments")

    for payment in pending:
        stats.checked += 1
        try:
            await check_payment(payment, ledger, oracle, forwarder, stats)
        except Exception as e:
            stats.errors += 1
            logger.exception(f"Error checking payment {payment.id}: {e}")

    logger.info(
        f"Payment check completed: "
        f"checked={stats.checked}, funded={stats.funded}, "
        f"completed={stats.completed}, failed={stats.failed}, "
        f"rate_limited={stats.rate_limited}, errors={stats.errors}"
    )
    return stats


async def check_payment(
    payment: Payment,
    ledger: PaymentLedger,
    oracle: BalanceOracle,
    forwarder: FundForwarder,
    stats: TickStats,
) -> None:
    """Check one payment and, when funded, sweep it."""
    result = await oracle.check_balance(payment.address)

    if isinstance(result, RateLimited):
        stats.rate_limited += 1
        return
    if isinstance(result, TransientError):
        stats.errors += 1
        logger.warning(
            f"Balance check for payment {payment.id} failed: {result.detail}"
        )
        return
    if not isinstance(result, Found):
        return

    balance_wei = result.balance_wei
    logger.info(
        f"Address {mask_address(payment.address)}: "
        f"Balance {wei_to_eth(balance_wei)} ETH, Expected: {payment.amount} ETH"
    )

    if not is_funded(balance_wei, payment.amount):
        return

    stats.funded += 1
    logger.info(f"Payment received for {payment.id}. Forwarding payment")

    outcome = await forwarder.forward(payment, balance_wei)

    try:
        if isinstance(outcome, Forwarded):
            ledger.transition(
                payment.id,
                PaymentStatus.COMPLETED,
                tx_hash=outcome.tx_hash,
            )
            stats.completed += 1
        elif isinstance(outcome, InsufficientForFee):
            ledger.transition(
                payment.id,
                PaymentStatus.FAILED,
                failure_reason=(
                    f"insufficient balance for fee "
                    f"(balance={outcome.balance} wei, fee={outcome.fee} wei)"
                ),
            )
            stats.failed += 1
        elif isinstance(outcome, Failed):
            ledger.transition(
                payment.id,
                PaymentStatus.FAILED,
                tx_hash=outcome.tx_hash,
                failure_reason=outcome.reason,
            )
            stats.failed += 1
    except PaymentError as e:
        stats.errors += 1
        logger.error(f"Could not record outcome for payment {payment.id}: {e}")
