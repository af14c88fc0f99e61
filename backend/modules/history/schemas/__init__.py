from .history_schemas import (
    HistoryEntry,
    MethodTotal,
    DayHistoryResponse,
    OrderDetailResponse,
)

__all__ = [
    "HistoryEntry",
    "MethodTotal",
    "DayHistoryResponse",
    "OrderDetailResponse",
]
