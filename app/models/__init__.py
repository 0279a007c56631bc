"""
Domain models.

Exports the in-memory payment records and their public views.
"""

from app.models.payment import Payment, PaymentReceipt, PaymentStatus, PaymentView


__all__ = [
    "Payment",
    "PaymentReceipt",
    "PaymentStatus",
    "PaymentView",
]
