from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import settings
from core.exceptions import register_exception_handlers
from app.startup import (
    configure_startup_logging, create_tables_if_requested, run_startup_checks
)

# ========== Areas & Tables ==========
from modules.tables.routes.table_routes import router as table_router

# ========== Menu Management ==========
from modules.menu.routes.menu_routes import router as menu_router

# ========== Orders Management ==========
from modules.orders.routes.order_routes import router as order_router

# ========== Payments ==========
from modules.payments.api import payment_router

# ========== History ==========
from modules.history.routes.history_routes import router as history_router

# ========== Health Monitoring ==========
from modules.health.routes.health_routes import router as health_router

configure_startup_logging()

app = FastAPI(
    title=settings.APP_TITLE,
    description="""
    Point-of-sale backend for a small cafe.

    ## Features

    * **Areas & Tables** - Seating areas and table occupancy
    * **Menu Management** - Menu groups and priced items
    * **Orders** - One open order per table, line items merged by name and price
    * **Payments** - Cash or transfer settlement that closes the order and frees the table
    * **History** - Daily payment history and bill details
    """,
    version="1.0.0",
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========== Include all routers ==========
app.include_router(table_router)
app.include_router(menu_router)
app.include_router(order_router)
app.include_router(payment_router)
app.include_router(history_router)
app.include_router(health_router)


@app.on_event("startup")
async def startup_event():
    """Validate configuration and database on application startup"""
    create_tables_if_requested()
    run_startup_checks()


@app.get("/")
def read_root():
    return {"message": f"{settings.APP_TITLE} is running"}
