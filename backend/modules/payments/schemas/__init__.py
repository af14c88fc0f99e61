# backend/modules/payments/schemas/__init__.py

from .payment_schemas import PayRequest, PaymentResponse, PayResponse

__all__ = ["PayRequest", "PaymentResponse", "PayResponse"]
