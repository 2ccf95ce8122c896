"""
PV01 Risk Service
─────────────────
Vends PV01 risk per CUSIP and across bucketed sectors.

  • per CUSIP: on every position update, PV01 = rate × aggregate position,
    with the rate taken from the static reference table
  • per sector: summed on demand over the sector's CUSIPs from the stored
    records; never stored and never published

CUSIPs in a sector that have no position yet contribute nothing.
"""

import logging
from typing import Any, Dict

from ..pipeline.event_types import PV01, Position
from ..pipeline.keyed_store import KeyedEventStore, ServiceListener
from ..reference.instruments import BucketedSector, ReferenceData

logger = logging.getLogger(__name__)


class RiskService(KeyedEventStore[str, PV01]):

    def __init__(self, reference_data: ReferenceData):
        super().__init__(name="Risk")
        self.reference_data = reference_data
        self.listener = RiskServiceListener(self)

    def add_position(self, position: Position) -> PV01:
        product = position.product
        risk = PV01(
            product=product,
            pv01=self.reference_data.pv01_rate(product.product_id),
            quantity=position.aggregate_position,
        )
        self.update(risk)
        return risk

    def get_bucketed_risk(self, sector: BucketedSector) -> PV01:
        """Fresh sector PV01: total exposure as the rate, unit quantity."""
        total = 0.0
        for product_id in sector.product_ids:
            risk = self.get(product_id)
            if risk is not None:
                total += risk.value
        return PV01(product=sector, pv01=total, quantity=1)

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["pv01_by_product"] = {pid: r.value for pid, r in self._data.items()}
        stats["total_pv01"] = sum(r.value for r in self._data.values())
        return stats


class RiskServiceListener(ServiceListener[Position]):
    """Positions → risk."""

    def __init__(self, service: RiskService):
        self.service = service
        self.downstream = service

    def process_add(self, data: Position) -> None:
        self.service.add_position(data)
