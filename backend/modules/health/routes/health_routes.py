"""
Health monitoring API endpoints.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from core.database import get_db

from ..services.health_service import HealthService
from ..schemas.health_schemas import HealthCheckResponse, HealthStatus

router = APIRouter(prefix="/health", tags=["Health Monitoring"])


@router.get("", response_model=HealthCheckResponse)
async def health_check(
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Basic health check endpoint.

    Returns 503 when the database cannot be reached.
    """
    service = HealthService(db)
    result = await service.check_health()
    if result.status == HealthStatus.UNHEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result
