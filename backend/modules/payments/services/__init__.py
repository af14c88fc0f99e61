# backend/modules/payments/services/__init__.py

from .payment_service import PaymentService, payment_service

__all__ = [
    "PaymentService",
    "payment_service",
]
