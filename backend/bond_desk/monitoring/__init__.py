from .historical import HistoricalDataService

__all__ = ["HistoricalDataService"]
