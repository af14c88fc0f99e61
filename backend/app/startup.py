"""
Application startup validation and initialization.

This module performs startup checks to ensure the application is
properly configured before serving requests.
"""

import logging
import sys
from typing import List, Tuple
from core.config import settings
from core.database import engine, Base
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import sqlalchemy as sa

logger = logging.getLogger(__name__)

REQUIRED_TABLES = [
    'areas',
    'cafe_tables',
    'menu_groups',
    'menu_items',
    'orders',
    'order_items',
    'payments',
]


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_database_connection(self) -> bool:
        """Check database connectivity"""
        try:
            with engine.connect() as conn:
                result = conn.execute(text("SELECT 1"))
                result.fetchone()
            logger.info("Database connection successful")
            return True
        except SQLAlchemyError as e:
            self.errors.append(f"Database connection failed: {str(e)}")
            return False

    def check_environment_config(self) -> bool:
        """Validate environment configuration"""
        if settings.is_production:
            if settings.DEBUG:
                self.warnings.append("DEBUG is enabled in production")
            if settings.is_sqlite:
                self.errors.append("SQLite is not supported in production")
                return False
            if settings.AUTO_CREATE_TABLES:
                self.warnings.append(
                    "AUTO_CREATE_TABLES is set in production - use alembic instead"
                )

        if settings.ENVIRONMENT == "development" and settings.DATABASE_URL.startswith(
            "postgresql+psycopg2://postgres:postgres@"
        ):
            self.warnings.append("Using the default development DATABASE_URL")

        return True

    def check_required_tables(self) -> bool:
        """Check if required database tables exist"""
        try:
            inspector = sa.inspect(engine)
            existing_tables = inspector.get_table_names()

            missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]

            if missing_tables:
                self.warnings.append(
                    f"Missing database tables: {', '.join(missing_tables)}. "
                    "Run migrations with: alembic upgrade head"
                )

            return True
        except SQLAlchemyError as e:
            self.warnings.append(f"Could not check database tables: {str(e)}")
            return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        """Run all validation checks"""
        checks = [
            ("Environment Configuration", self.check_environment_config),
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.check_required_tables),
        ]

        all_passed = True

        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False

        return all_passed, self.errors, self.warnings


def create_tables_if_requested():
    """Create missing tables when AUTO_CREATE_TABLES is set"""
    if not settings.AUTO_CREATE_TABLES:
        return

    # Model modules register their tables on Base.metadata
    import modules.tables.models.table_models  # noqa: F401
    import modules.menu.models.menu_models  # noqa: F401
    import modules.orders.models.order_models  # noqa: F401
    import modules.payments.models.payment_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created (AUTO_CREATE_TABLES)")


def run_startup_checks():
    """Run all startup validation checks"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_TITLE}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Business timezone: {settings.BUSINESS_TIMEZONE}")
    logger.info("=" * 60)

    validator = StartupValidator()
    passed, errors, warnings = validator.validate_all()

    if warnings:
        logger.warning("Startup Warnings:")
        for warning in warnings:
            logger.warning(f"  {warning}")

    if errors:
        logger.error("Startup Errors:")
        for error in errors:
            logger.error(f"  {error}")

    if not passed and settings.is_production:
        logger.error("Cannot start in production with errors!")
        sys.exit(1)
    elif not passed:
        logger.warning(f"Starting in {settings.ENVIRONMENT} mode despite errors")
    else:
        logger.info("All startup checks passed")

    logger.info("=" * 60)
    return passed, warnings


def configure_startup_logging():
    """Configure logging for startup"""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
