"""
Payment model.

Payments live in memory for the lifetime of the process. Lifecycle:
- pending: disposable address issued, waiting for funds
- completed: funds swept to the master address
- failed: sweep impossible or rejected; never retried
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from app.utils.security import SecretKey


class PaymentStatus(StrEnum):
    """Payment status values."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not PaymentStatus.PENDING


@dataclass
class Payment:
    """
    Internal payment record.

    Carries the disposable wallet's private key and must never be
    serialized directly. Use PaymentView for anything leaving the core.
    """

    id: str
    order_id: str
    address: str
    private_key: SecretKey = field(repr=False, compare=False)
    amount: str
    created_at: datetime
    status: PaymentStatus = PaymentStatus.PENDING
    completed_at: datetime | None = None
    tx_hash: str | None = None
    failure_reason: str | None = None

    def to_view(self) -> "PaymentView":
        return PaymentView(
            id=self.id,
            order_id=self.order_id,
            address=self.address,
            amount=self.amount,
            status=self.status,
            created_at=self.created_at,
            completed_at=self.completed_at,
            tx_hash=self.tx_hash,
            failure_reason=self.failure_reason,
        )


@dataclass(frozen=True)
class PaymentView:
    """Public representation of a payment. Has no key material."""

    id: str
    order_id: str
    address: str
    amount: str
    status: PaymentStatus
    created_at: datetime
    completed_at: datetime | None = None
    tx_hash: str | None = None
    failure_reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "id": self.id,
            "orderId": self.order_id,
            "address": self.address,
            "amount": self.amount,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(timespec="milliseconds"),
            "completedAt": (
                self.completed_at.isoformat(timespec="milliseconds")
                if self.completed_at else None
            ),
            "txHash": self.tx_hash,
            "failureReason": self.failure_reason,
        }


@dataclass(frozen=True)
class PaymentReceipt:
    """Response to a create request: where and how much to pay."""

    payment_id: str
    address: str
    amount: str

    def to_dict(self) -> dict[str, str]:
        return {
            "paymentId": self.payment_id,
            "address": self.address,
            "amount": self.amount,
        }
