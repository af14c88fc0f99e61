# backend/modules/payments/services/payment_service.py

import logging
from typing import Optional
from decimal import Decimal
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.exceptions import APIError, NotFoundError, ConflictError, ValidationError
from core.types import to_money
from modules.tables.models.table_models import CafeTable
from ..models.payment_models import Payment, PaymentMethod
from ...orders.models.order_models import Order
from ...orders.services.order_service import compute_total


logger = logging.getLogger(__name__)


def _is_duplicate_payment(error: IntegrityError) -> bool:
    """True when the unique index on payments.order_id rejected the insert"""
    message = str(error.orig).lower()
    return "payments.order_id" in message or "ix_payments_order_id" in message


class PaymentService:
    """
    Settles open orders.

    A payment is all or nothing: the payment row, the order becoming
    paid and the table becoming empty are committed together or not at all.
    """

    async def pay(
        self,
        db: Session,
        order_id: int,
        method: PaymentMethod,
        amount: Optional[Decimal] = None
    ) -> Payment:
        """
        Record the payment for an order

        Args:
            db: Database session
            order_id: Order ID
            method: cash or transfer
            amount: Amount received; defaults to the order total and,
                when given, must equal it

        Returns:
            Payment record
        """
        try:
            order = db.query(Order).filter(
                Order.id == order_id
            ).with_for_update().first()
            if not order:
                raise NotFoundError(f"Order {order_id} not found")

            if not order.is_open:
                raise ConflictError(
                    f"Order {order_id} is already paid",
                    error_code="ORDER_ALREADY_PAID"
                )

            if not order.lines:
                raise ValidationError(
                    f"Order {order_id} has no items",
                    error_code="EMPTY_ORDER"
                )

            total = compute_total(order)
            if amount is not None:
                if amount <= 0:
                    raise ValidationError(
                        "Payment amount must be positive",
                        error_code="INVALID_AMOUNT"
                    )
                if to_money(amount) != total:
                    raise ValidationError(
                        f"Payment amount {to_money(amount)} does not match "
                        f"order total {total}",
                        error_code="AMOUNT_MISMATCH"
                    )

            table = db.query(CafeTable).filter(
                CafeTable.id == order.table_id
            ).with_for_update().first()

            payment = Payment(
                order_id=order.id,
                method=PaymentMethod(method).value,
                paid_amount=total
            )
            db.add(payment)
            order.mark_paid()
            if table:
                table.release()

            db.commit()
            db.refresh(payment)

            logger.info(
                f"Order {order.id} paid by {payment.method}: {payment.paid_amount}, "
                f"table {order.table_id} released"
            )
            return payment

        except APIError as e:
            db.rollback()
            logger.warning(f"Payment rejected for order {order_id}: {e.detail}")
            raise
        except IntegrityError as e:
            db.rollback()
            if not _is_duplicate_payment(e):
                logger.error(f"Payment failed for order {order_id}: {e}")
                raise
            logger.warning(f"Duplicate payment for order {order_id}: {e}")
            raise ConflictError(
                f"Order {order_id} is already paid",
                error_code="ORDER_ALREADY_PAID"
            )
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Payment failed for order {order_id}: {e}")
            raise

    async def get_payment_for_order(
        self, db: Session, order_id: int
    ) -> Optional[Payment]:
        return db.query(Payment).filter(Payment.order_id == order_id).first()


# Global service instance
payment_service = PaymentService()
