from .history_service import HistoryService, DayHistory

__all__ = ["HistoryService", "DayHistory"]
