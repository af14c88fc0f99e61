# backend/modules/history/schemas/history_schemas.py

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from core.types import Money, UtcDateTime
from modules.orders.enums.order_enums import OrderStatus
from modules.orders.schemas.order_schemas import GroupedLineOut
from modules.payments.models.payment_models import PaymentMethod
from modules.payments.schemas.payment_schemas import PaymentResponse


class HistoryEntry(BaseModel):
    """One settled bill in a day's history"""

    payment_id: int
    order_id: int
    table_name: str
    method: PaymentMethod
    paid_amount: Money
    paid_at: UtcDateTime

    model_config = ConfigDict(from_attributes=True)


class MethodTotal(BaseModel):
    method: PaymentMethod
    count: int
    total: Money


class DayHistoryResponse(BaseModel):
    day: date
    timezone: str
    payments: List[HistoryEntry]
    count: int
    revenue: Money
    by_method: List[MethodTotal]


class OrderDetailResponse(BaseModel):
    """Bill detail: header, lines grouped by item name, payment and total"""

    order_id: int
    table_name: str
    status: OrderStatus
    created_at: UtcDateTime
    lines: List[GroupedLineOut]
    total: Money
    payment: Optional[PaymentResponse] = None
