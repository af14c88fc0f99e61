# backend/modules/payments/api/payment_endpoints.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from core.database import get_db
from core.exceptions import NotFoundError
from ..services import payment_service
from ..schemas.payment_schemas import PayRequest, PaymentResponse, PayResponse
from ...orders.controllers.order_controller import serialize_order


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["payments"])


@router.post("/{order_id}/pay", response_model=PayResponse)
async def pay_order(
    order_id: int,
    pay_data: PayRequest,
    db: Session = Depends(get_db)
):
    """
    Settle an open order

    The payment is recorded, the order marked paid and the table freed in
    one transaction. `amount` may be omitted; when sent it must equal the
    order total.
    """
    payment = await payment_service.pay(
        db=db,
        order_id=order_id,
        method=pay_data.method,
        amount=pay_data.amount
    )

    return PayResponse(
        payment=PaymentResponse.model_validate(payment),
        order=serialize_order(payment.order),
    )


@router.get("/{order_id}/payment", response_model=PaymentResponse)
async def get_order_payment(order_id: int, db: Session = Depends(get_db)):
    """Get the payment recorded for an order"""
    payment = await payment_service.get_payment_for_order(db, order_id)
    if not payment:
        raise NotFoundError(f"No payment recorded for order {order_id}")
    return payment
