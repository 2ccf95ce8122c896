"""
Pricing: the fractional price codec and the internal price store.
The store lives in `pricing_service` and is imported from there, since
the record types themselves depend on the codec.
"""

from .fractional import from_fraction, to_fraction

__all__ = ["from_fraction", "to_fraction"]
