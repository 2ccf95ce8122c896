"""
Historical Data Recorder
────────────────────────
Listener that keeps the display rows of everything a store publishes:
the latest row per persist key plus a bounded, append-only history.
Writing those rows anywhere durable is left to whoever reads them.
"""

import collections
import logging
from typing import Any, Deque, Dict, List, Optional, Tuple

from ..pipeline.keyed_store import ServiceListener

logger = logging.getLogger(__name__)


class HistoricalDataService(ServiceListener[Any]):

    def __init__(self, name: str, max_rows: int = 10_000):
        self._name = name
        self._latest: Dict[str, List[str]] = {}
        self._history: Deque[Tuple[str, List[str]]] = collections.deque(maxlen=max_rows)
        self._rows_recorded = 0

    @property
    def name(self) -> str:
        return f"History[{self._name}]"

    def process_add(self, data: Any) -> None:
        self.persist_data(data.persist_key, data)

    def persist_data(self, persist_key: str, data: Any) -> None:
        row = data.to_fields()
        self._latest[persist_key] = row
        self._history.append((persist_key, row))
        self._rows_recorded += 1

    def get_latest(self, persist_key: str) -> Optional[List[str]]:
        row = self._latest.get(persist_key)
        return list(row) if row is not None else None

    def get_history(self, limit: int = 50) -> List[Tuple[str, List[str]]]:
        rows = list(self._history)
        return rows[-limit:] if limit else rows

    def get_stats(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "keys": len(self._latest),
            "rows_recorded": self._rows_recorded,
            "rows_retained": len(self._history),
        }
