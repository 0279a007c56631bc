"""
Services.

Payment lifecycle layer.
"""

from app.services.payment_ledger import PaymentLedger


__all__ = [
    "PaymentLedger",
]
