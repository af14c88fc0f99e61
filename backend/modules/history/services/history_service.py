# backend/modules/history/services/history_service.py

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import NotFoundError
from core.types import to_money
from modules.orders.models.order_models import Order
from modules.orders.services.order_service import compute_total
from modules.orders.utils.line_math import group_lines
from modules.payments.models.payment_models import Payment, PaymentMethod

logger = logging.getLogger(__name__)


@dataclass
class DayHistory:
    """Result container for one business day"""

    day: date
    timezone: str
    payments: List[dict] = field(default_factory=list)
    revenue: Decimal = Decimal("0.00")
    by_method: List[dict] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.payments)


class HistoryService:
    """Read-only views over settled orders"""

    def __init__(self, db: Session, tz_name: Optional[str] = None):
        self.db = db
        self.tz_name = tz_name or settings.BUSINESS_TIMEZONE
        self.tz = ZoneInfo(self.tz_name)

    def today(self) -> date:
        return datetime.now(self.tz).date()

    def day_bounds(self, day: date) -> Tuple[datetime, datetime]:
        """
        Naive UTC [start, end) covering the local business day.

        Both ends are local midnights, so DST days are 23 or 25 hours long.
        """
        start = datetime.combine(day, time.min, tzinfo=self.tz)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=self.tz)
        return (
            start.astimezone(timezone.utc).replace(tzinfo=None),
            end.astimezone(timezone.utc).replace(tzinfo=None),
        )

    def day_history(self, day: Optional[date] = None) -> DayHistory:
        """Payments of the day, newest first, with revenue per method"""
        day = day or self.today()
        start, end = self.day_bounds(day)

        rows = (
            self.db.query(Payment, Order.table_name)
            .join(Order, Order.id == Payment.order_id)
            .filter(Payment.paid_at >= start, Payment.paid_at < end)
            .order_by(desc(Payment.paid_at), desc(Payment.id))
            .all()
        )

        payments = [
            {
                "payment_id": payment.id,
                "order_id": payment.order_id,
                "table_name": table_name,
                "method": payment.method,
                "paid_amount": to_money(payment.paid_amount),
                "paid_at": payment.paid_at,
            }
            for payment, table_name in rows
        ]

        method_rows = (
            self.db.query(
                Payment.method,
                func.count(Payment.id).label("count"),
                func.coalesce(func.sum(Payment.paid_amount), 0).label("total"),
            )
            .filter(Payment.paid_at >= start, Payment.paid_at < end)
            .group_by(Payment.method)
            .all()
        )
        per_method = {row.method: row for row in method_rows}

        by_method = []
        for method in PaymentMethod:
            row = per_method.get(method.value)
            by_method.append(
                {
                    "method": method.value,
                    "count": row.count if row else 0,
                    "total": to_money(row.total if row else 0),
                }
            )

        revenue = to_money(sum((entry["total"] for entry in by_method), Decimal("0")))

        logger.debug(
            f"History for {day} ({self.tz_name}): {len(payments)} payments, "
            f"revenue {revenue}"
        )
        return DayHistory(
            day=day,
            timezone=self.tz_name,
            payments=payments,
            revenue=revenue,
            by_method=by_method,
        )

    def order_detail(self, order_id: int) -> dict:
        """Bill view of a single order, paid or not"""
        order = self.db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError(f"Order {order_id} not found")

        payment = (
            self.db.query(Payment).filter(Payment.order_id == order.id).first()
        )

        return {
            "order_id": order.id,
            "table_name": order.table_name,
            "status": order.status,
            "created_at": order.created_at,
            "lines": group_lines(order.lines),
            "total": compute_total(order),
            "payment": payment,
        }
