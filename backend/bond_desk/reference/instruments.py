"""
Instrument Reference Data
─────────────────────────
Static bond master, PV01 rates and risk sectors. Loaded once at startup
and shared read-only with every component that needs a lookup.
"""

from datetime import date
from typing import Dict, List, Tuple

from pydantic import BaseModel, Field, model_validator

from ..errors import UnknownInstrumentError


class Bond(BaseModel):
    product_id: str = Field(..., min_length=1)
    id_type: str = "CUSIP"
    ticker: str
    coupon: float = Field(..., ge=0)
    maturity_date: date

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.ticker} {self.coupon:.4%} {self.maturity_date.isoformat()}"


class BucketedSector(BaseModel):
    """Named group of bonds that risk can be aggregated over."""
    name: str = Field(..., min_length=1)
    products: Tuple[Bond, ...]

    model_config = {"frozen": True}

    @property
    def product_id(self) -> str:
        return self.name

    @property
    def product_ids(self) -> List[str]:
        return [b.product_id for b in self.products]


# (maturity years, CUSIP, maturity date, coupon, PV01 per unit)
_TREASURY_CURVE = [
    (2, "912828V23", date(2026, 12, 15), 0.0425, 0.019),
    (3, "912828W22", date(2027, 12, 15), 0.0430, 0.028),
    (5, "912828X21", date(2029, 12, 15), 0.0435, 0.046),
    (7, "912828Y20", date(2031, 12, 15), 0.0440, 0.064),
    (10, "912828Z19", date(2034, 12, 15), 0.0445, 0.091),
    (20, "912810FZ8", date(2044, 12, 15), 0.0450, 0.142),
    (30, "912810GZ6", date(2054, 12, 15), 0.0455, 0.183),
]

_TREASURY_SECTORS = {
    "FrontEnd": [2, 3],
    "Belly": [5, 7, 10],
    "LongEnd": [20, 30],
}


class ReferenceData(BaseModel):
    bonds: Dict[str, Bond]
    pv01_rates: Dict[str, float] = Field(default_factory=dict)
    sectors: Dict[str, BucketedSector] = Field(default_factory=dict)
    maturities: Dict[int, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_keys(self) -> "ReferenceData":
        for product_id, bond in self.bonds.items():
            if bond.product_id != product_id:
                raise ValueError(f"bond keyed as {product_id} has id {bond.product_id}")
        for product_id in self.pv01_rates:
            if product_id not in self.bonds:
                raise ValueError(f"PV01 rate for unknown bond {product_id}")
        for sector in self.sectors.values():
            for product_id in sector.product_ids:
                if product_id not in self.bonds:
                    raise ValueError(f"sector {sector.name} holds unknown bond {product_id}")
        for years, product_id in self.maturities.items():
            if product_id not in self.bonds:
                raise ValueError(f"{years}Y maturity maps to unknown bond {product_id}")
        return self

    @classmethod
    def treasuries(cls) -> "ReferenceData":
        """The on-the-run US Treasury universe traded by the desk."""
        bonds: Dict[str, Bond] = {}
        pv01_rates: Dict[str, float] = {}
        maturities: Dict[int, str] = {}
        for years, cusip, maturity, coupon, pv01 in _TREASURY_CURVE:
            bonds[cusip] = Bond(
                product_id=cusip,
                ticker=f"US{years}Y",
                coupon=coupon,
                maturity_date=maturity,
            )
            pv01_rates[cusip] = pv01
            maturities[years] = cusip

        sectors = {
            name: BucketedSector(
                name=name,
                products=tuple(bonds[maturities[y]] for y in years),
            )
            for name, years in _TREASURY_SECTORS.items()
        }
        return cls(bonds=bonds, pv01_rates=pv01_rates, sectors=sectors, maturities=maturities)

    def get_bond(self, product_id: str) -> Bond:
        try:
            return self.bonds[product_id]
        except KeyError:
            raise UnknownInstrumentError(product_id) from None

    def get_bond_by_maturity(self, years: int) -> Bond:
        try:
            return self.bonds[self.maturities[years]]
        except KeyError:
            raise UnknownInstrumentError(f"{years}Y", table="maturity map") from None

    def pv01_rate(self, product_id: str) -> float:
        try:
            return self.pv01_rates[product_id]
        except KeyError:
            raise UnknownInstrumentError(product_id, table="PV01 table") from None

    def sector(self, name: str) -> BucketedSector:
        try:
            return self.sectors[name]
        except KeyError:
            raise UnknownInstrumentError(name, table="sector table") from None

    @property
    def product_ids(self) -> List[str]:
        return list(self.bonds)
