# backend/core/query_logger.py

import logging
import time
from sqlalchemy import event
from sqlalchemy.engine import Engine

from core.config import get_settings

logger = logging.getLogger("sqlalchemy.engine")
query_logger = logging.getLogger("query_performance")

settings = get_settings()


class QueryLogger:
    """Flags statements slower than the configured threshold"""

    def __init__(self):
        self.enabled = settings.ENVIRONMENT == "development" or settings.DEBUG
        self.slow_query_threshold = settings.SLOW_QUERY_THRESHOLD_SECONDS

    def record(self, statement: str, elapsed: float) -> bool:
        """Log the statement if it ran too long; returns whether it did"""
        if elapsed <= self.slow_query_threshold:
            return False
        query_logger.warning(f"SLOW QUERY ({elapsed:.3f}s): {statement[:200]}...")
        return True


# Singleton instance
query_logger_instance = QueryLogger()


def setup_query_logging(engine: Engine):
    """
    Attach connection setup and (in development) timing hooks to an engine

    Args:
        engine: SQLAlchemy engine instance
    """

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_conn, connection_record):
        if engine.dialect.name == "sqlite":
            # Needed for ON DELETE CASCADE from menu_groups to menu_items
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()
        logger.debug("New database connection established")

    if not query_logger_instance.enabled:
        return

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        started = conn.info["query_start_time"].pop(-1)
        query_logger_instance.record(statement, time.perf_counter() - started)
