# backend/modules/payments/schemas/payment_schemas.py

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal

from core.types import Money, UtcDateTime
from modules.orders.schemas.order_schemas import OrderOut
from ..models.payment_models import PaymentMethod


class PayRequest(BaseModel):
    """Schema for settling an order"""
    method: PaymentMethod
    amount: Optional[Decimal] = Field(
        None, gt=0, max_digits=12, decimal_places=2,
        description="Amount received (defaults to order total, must match it)"
    )


class PaymentResponse(BaseModel):
    """Basic payment response"""
    id: int
    order_id: int
    method: PaymentMethod
    paid_amount: Money
    paid_at: UtcDateTime

    model_config = ConfigDict(from_attributes=True)


class PayResponse(BaseModel):
    """Payment, the now-paid order and where a client should go next"""
    payment: PaymentResponse
    order: OrderOut
    redirect: str = "/history/today"
