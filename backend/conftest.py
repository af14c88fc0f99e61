"""
Pytest configuration file for backend testing.
"""
import os
import sys
from decimal import Decimal
from pathlib import Path

# Settings are read at import time; point them at SQLite before any app import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["BUSINESS_TIMEZONE"] = "Asia/Ho_Chi_Minh"

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from core.database import Base, get_db  # noqa: E402
from core.query_logger import setup_query_logging  # noqa: E402

# Import all models to register them with SQLAlchemy
from modules.tables.models import table_models  # noqa: E402,F401
from modules.menu.models import menu_models  # noqa: E402,F401
from modules.orders.models import order_models  # noqa: E402,F401
from modules.payments.models import payment_models  # noqa: E402,F401

from modules.tables.models.table_models import TableStatus  # noqa: E402
from modules.orders.tests.factories import (  # noqa: E402
    bind_factories, CafeTableFactory, MenuGroupFactory, MenuItemFactory
)

SQLALCHEMY_DATABASE_URL = "sqlite:///./test_cafe_pos.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
setup_query_logging(engine)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine
)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    bind_factories(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""
    from app.main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def table(db_session):
    """An empty table in its own area."""
    return CafeTableFactory(name="B01", status=TableStatus.EMPTY.value)


@pytest.fixture
def coffee(db_session):
    return MenuItemFactory(
        name="Coffee", price=Decimal("20000.00"),
        group=MenuGroupFactory(name="Coffee")
    )


@pytest.fixture
def tea(db_session):
    return MenuItemFactory(
        name="Tea", price=Decimal("15000.00"),
        group=MenuGroupFactory(name="Tea")
    )


@pytest.fixture
def inactive_item(db_session):
    return MenuItemFactory(name="Seasonal Juice", is_active=False)
