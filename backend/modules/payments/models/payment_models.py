# backend/modules/payments/models/payment_models.py

from sqlalchemy import (
    Column, Integer, String, ForeignKey, DateTime, Numeric, CheckConstraint
)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import utcnow
from enum import Enum


class PaymentMethod(str, Enum):
    """Payment method types"""
    CASH = "cash"
    TRANSFER = "transfer"


class Payment(Base):
    """Settlement record for an order; written once, never updated"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)

    # One payment per order
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False,
                      unique=True, index=True)

    method = Column(String(20), nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False)
    paid_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    order = relationship("Order")

    __table_args__ = (
        CheckConstraint("method IN ('cash', 'transfer')",
                        name="chk_payment_method"),
        CheckConstraint("paid_amount > 0", name="chk_payment_amount_positive"),
    )

    def __repr__(self):
        return (f"<Payment(id={self.id}, order_id={self.order_id}, "
                f"method='{self.method}', paid_amount={self.paid_amount})>")
