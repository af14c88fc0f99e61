# backend/modules/payments/models/__init__.py

from .payment_models import PaymentMethod, Payment

__all__ = [
    "PaymentMethod",
    "Payment",
]
