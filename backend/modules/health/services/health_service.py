"""
Health monitoring service implementation.
"""

import time
import logging
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from core.mixins import utcnow
from .. import __version__ as APP_VERSION
from ..schemas.health_schemas import (
    HealthStatus, ComponentStatus, HealthCheckResponse
)

logger = logging.getLogger(__name__)


class HealthService:
    """Service for health monitoring operations"""

    def __init__(self, db: Session):
        self.db = db

    async def check_health(self) -> HealthCheckResponse:
        """Liveness plus a database round trip"""
        components = [await self.check_database_health()]

        unhealthy_count = sum(1 for c in components if c.status == HealthStatus.UNHEALTHY)
        degraded_count = sum(1 for c in components if c.status == HealthStatus.DEGRADED)

        if unhealthy_count > 0:
            overall_status = HealthStatus.UNHEALTHY
        elif degraded_count > 0:
            overall_status = HealthStatus.DEGRADED
        else:
            overall_status = HealthStatus.HEALTHY

        return HealthCheckResponse(
            status=overall_status,
            timestamp=utcnow(),
            version=APP_VERSION,
            environment=settings.ENVIRONMENT,
            components=components,
            checks_passed=len(components) - unhealthy_count - degraded_count,
            checks_failed=unhealthy_count
        )

    async def check_database_health(self) -> ComponentStatus:
        """Check database connectivity and response time"""
        start_time = time.time()

        try:
            self.db.execute(text("SELECT 1")).fetchone()
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return ComponentStatus(
                name="database",
                status=HealthStatus.UNHEALTHY,
                last_checked=utcnow(),
                message=str(e),
                details={"can_connect": False}
            )

        response_time_ms = (time.time() - start_time) * 1000
        if response_time_ms > settings.SLOW_QUERY_THRESHOLD_SECONDS * 1000:
            status = HealthStatus.DEGRADED
        else:
            status = HealthStatus.HEALTHY

        return ComponentStatus(
            name="database",
            status=status,
            response_time_ms=response_time_ms,
            last_checked=utcnow(),
            details={
                "can_connect": True,
                "dialect": self.db.get_bind().dialect.name
            }
        )
