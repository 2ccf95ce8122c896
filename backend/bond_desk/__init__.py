"""
Fixed-Income Trading Desk
═════════════════════════
Quote-to-risk pipeline for US Treasuries:
  • Keyed Event Stores — latest value per key, synchronous fan-out to listeners
  • Market Data — order-book snapshots, best bid/offer, aggregated depth
  • Algo Execution — crosses the spread when it is tight, alternating sides
  • Algo Streaming — two-way quotes around the internal mid
  • Execution / Streaming — routes algo output downstream
  • Trade Booking — round-robin across desk books
  • Positions — per-book and aggregate positions per CUSIP
  • Risk — PV01 per CUSIP and per bucketed sector
  • Inquiries — customer RFQ lifecycle
"""

from .config import DeskConfig
from .orchestrator import DeskOrchestrator

__all__ = ["DeskConfig", "DeskOrchestrator"]
