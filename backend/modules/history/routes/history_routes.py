# backend/modules/history/routes/history_routes.py

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from modules.payments.schemas.payment_schemas import PaymentResponse
from ..services.history_service import HistoryService
from ..schemas.history_schemas import DayHistoryResponse, OrderDetailResponse


router = APIRouter(prefix="/history", tags=["History"])


def get_history_service(db: Session = Depends(get_db)) -> HistoryService:
    """Dependency to get history service instance"""
    return HistoryService(db)


def _day_response(history) -> DayHistoryResponse:
    return DayHistoryResponse(
        day=history.day,
        timezone=history.timezone,
        payments=history.payments,
        count=history.count,
        revenue=history.revenue,
        by_method=history.by_method,
    )


@router.get("/today", response_model=DayHistoryResponse)
async def get_today_history(
    history_service: HistoryService = Depends(get_history_service)
):
    """Payments taken today in the business timezone, newest first"""
    return _day_response(history_service.day_history())


@router.get("/day", response_model=DayHistoryResponse)
async def get_day_history(
    day: date = Query(..., description="Business day, YYYY-MM-DD"),
    history_service: HistoryService = Depends(get_history_service)
):
    return _day_response(history_service.day_history(day))


@router.get("/orders/{order_id}", response_model=OrderDetailResponse)
async def get_order_detail(
    order_id: int,
    history_service: HistoryService = Depends(get_history_service)
):
    """Bill detail with lines grouped by item name"""
    detail = history_service.order_detail(order_id)
    payment = detail.pop("payment")
    return OrderDetailResponse(
        **detail,
        payment=PaymentResponse.model_validate(payment) if payment else None,
    )
