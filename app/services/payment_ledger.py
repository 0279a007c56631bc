"""
Payment ledger.

In-memory registry of payments keyed by payment id. The ledger is the only
place where payment status changes; every read hands out a copy so callers
never hold references to live records.
"""

import threading
import uuid
from collections import Counter
from dataclasses import replace
from datetime import UTC, datetime

from loguru import logger

from app.models.payment import Payment, PaymentReceipt, PaymentStatus, PaymentView
from app.services.blockchain.address_minter import AddressMinter
from app.utils.exceptions import InvalidStatusTransitionError, PaymentNotFoundError
from app.utils.security import mask_address


class PaymentLedger:
    """
    Thread-safe payment registry.

    Records are kept in insertion order. All reads and writes go through
    a single lock, so a status transition can never interleave with a
    concurrent create or read.
    """

    def __init__(self, minter: AddressMinter | None = None) -> None:
        self._minter = minter or AddressMinter()
        self._payments: dict[str, Payment] = {}
        self._lock = threading.Lock()

    def create(self, order_id: str, amount: str) -> PaymentReceipt:
        """
        Register a new payment with a fresh disposable address.

        Args:
            order_id: Caller's order reference
            amount: Expected amount in ETH, as a decimal string

        Returns:
            PaymentReceipt with payment id, address and amount
        """
        address, private_key = self._minter.mint()

        with self._lock:
            payment_id = str(uuid.uuid4())
            while payment_id in self._payments:
                payment_id = str(uuid.uuid4())

            payment = Payment(
                id=payment_id,
                order_id=order_id,
                address=address,
                private_key=private_key,
                amount=amount,
                created_at=datetime.now(UTC),
            )
            self._payments[payment_id] = payment

        logger.info(
            f"Payment created: {payment_id} - Address: {mask_address(address)}"
        )

        return PaymentReceipt(
            payment_id=payment_id,
            address=address,
            amount=amount,
        )

    def get(self, payment_id: str) -> Payment | None:
        """Return a snapshot of the payment or None."""
        with self._lock:
            payment = self._payments.get(payment_id)
            return replace(payment) if payment else None

    def get_view(self, payment_id: str) -> PaymentView | None:
        """Return the public view of the payment or None."""
        with self._lock:
            payment = self._payments.get(payment_id)
            return payment.to_view() if payment else None

    def list_pending(self) -> list[Payment]:
        """Snapshot of all pending payments in creation order."""
        with self._lock:
            return [
                replace(payment)
                for payment in self._payments.values()
                if payment.status == PaymentStatus.PENDING
            ]

    def list_all(self) -> list[Payment]:
        """Snapshot of all payments in creation order."""
        with self._lock:
            return [replace(payment) for payment in self._payments.values()]

    def list_views(self) -> list[PaymentView]:
        """Public views of all payments in creation order."""
        with self._lock:
            return [payment.to_view() for payment in self._payments.values()]

    def count_by_status(self) -> dict[str, int]:
        with self._lock:
            counts = Counter(payment.status for payment in self._payments.values())
        return {status.value: counts.get(status, 0) for status in PaymentStatus}

    def transition(
        self,
        payment_id: str,
        new_status: PaymentStatus,
        completed_at: datetime | None = None,
        tx_hash: str | None = None,
        failure_reason: str | None = None,
    ) -> Payment:
        """
        Move a pending payment to a terminal status.

        Args:
            payment_id: Payment to update
            new_status: COMPLETED or FAILED
            completed_at: Completion time (defaults to now for COMPLETED)
            tx_hash: Sweep transaction hash, if one was submitted
            failure_reason: Why the payment failed

        Returns:
            Snapshot of the updated payment

        Raises:
            PaymentNotFoundError: Unknown payment id
            InvalidStatusTransitionError: Payment is already terminal or
                the requested status is not terminal
        """
        with self._lock:
            payment = self._payments.get(payment_id)
            if payment is None:
                raise PaymentNotFoundError(payment_id)

            if payment.status.is_terminal or not new_status.is_terminal:
                raise InvalidStatusTransitionError(
                    payment_id, payment.status.value, new_status.value
                )

            payment.status = new_status
            if tx_hash:
                payment.tx_hash = tx_hash

            if new_status == PaymentStatus.COMPLETED:
                now = datetime.now(UTC)
                # completed_at never precedes created_at
                payment.completed_at = max(
                    completed_at or now, payment.created_at
                )
            else:
                payment.failure_reason = failure_reason

            return replace(payment)
