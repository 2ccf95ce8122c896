"""
Desk error types.
Core transforms raise these and let them propagate; the ingestion feeds
catch the record-level ones and skip the offending record.
"""

from typing import List, Optional


class BondDeskError(Exception):
    """Base class for every error raised by the desk."""


class RecordFormatError(BondDeskError, ValueError):
    """Raised when an external line record cannot be parsed."""
    def __init__(self, message: str, line: Optional[str] = None):
        self.message = message
        self.line = line
        super().__init__(message)


class PriceFormatError(RecordFormatError):
    """Raised for a malformed fractional price string (e.g. '99-3a')."""


class UnknownInstrumentError(BondDeskError, KeyError):
    """Raised when a product id has no row in the reference data."""
    def __init__(self, product_id: str, table: str = "bond master"):
        self.product_id = product_id
        self.table = table
        super().__init__(f"{product_id!r} not found in {table}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownInquiryError(BondDeskError, KeyError):
    """Raised when quoting or rejecting an inquiry id that was never ingested."""
    def __init__(self, inquiry_id: str):
        self.inquiry_id = inquiry_id
        super().__init__(f"inquiry {inquiry_id!r} not found")

    def __str__(self) -> str:
        return self.args[0]


class ObserverCycleError(BondDeskError):
    """Raised when store subscriptions form a cycle."""
    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__("observer cycle: " + " -> ".join(cycle))


class ConfigError(BondDeskError, ValueError):
    """Raised for an invalid configuration value."""
