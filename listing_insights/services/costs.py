"""Property tax and insurance estimates used when a listing lacks actual figures."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional

import pandas as pd

from ..config import DATA_DIR
from ..utils.coerce import positive_or_none, require_non_negative, require_positive
from ..utils.io import load_csv
from ..utils.logging import get_logger, log_event

LOGGER = get_logger("services.costs")

DEFAULT_TAX_RATE_PERCENT = 1.2
INSURANCE_RATE = 0.004
REGION_TAX_CSV = "region_tax_rates.csv"

# Annual effective rates (percent of price) for the markets served out of the box.
DEFAULT_REGION_RATES: Dict[str, float] = {
    "DE": 0.50,
    "DE-NCC": 0.54,
    "DE-KC": 0.51,
    "DE-SC": 0.43,
}


def _normalise_code(code: object) -> str:
    if code is None:
        return ""
    return str(code).strip().upper()


class RegionTaxTable:
    """Read-only mapping from region code to annual property-tax rate percentage."""

    def __init__(self, rates: Mapping[str, float], default_rate: float = DEFAULT_TAX_RATE_PERCENT) -> None:
        cleaned: Dict[str, float] = {}
        for code, rate in rates.items():
            key = _normalise_code(code)
            if not key:
                raise ValueError(f"Empty region code for rate {rate}")
            cleaned[key] = require_non_negative(f"tax_rate[{key}]", rate)
        self._rates = MappingProxyType(cleaned)
        self.default_rate = require_non_negative("default_rate", default_rate)

    def rate_for(self, region_code: Optional[str]) -> float:
        key = _normalise_code(region_code)
        rate = self._rates.get(key)
        if rate is None:
            LOGGER.debug("tax_rate_default region=%s rate=%s", key or "-", self.default_rate)
            return self.default_rate
        return rate

    def __contains__(self, region_code: object) -> bool:
        return _normalise_code(region_code) in self._rates

    def __len__(self) -> int:
        return len(self._rates)

    def to_dict(self) -> Dict[str, float]:
        return dict(self._rates)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, default_rate: float = DEFAULT_TAX_RATE_PERCENT) -> "RegionTaxTable":
        missing = {"region_code", "rate_percent"} - set(frame.columns)
        if missing:
            raise ValueError(f"Region tax table is missing columns: {sorted(missing)}")
        frame = frame.dropna(subset=["region_code", "rate_percent"])
        rates = dict(zip(frame["region_code"].astype(str), pd.to_numeric(frame["rate_percent"], errors="raise")))
        return cls(rates, default_rate=default_rate)

    @classmethod
    def from_csv(cls, name: str = REGION_TAX_CSV, data_dir: str = DATA_DIR) -> "RegionTaxTable":
        return cls.from_frame(load_csv(name, data_dir))


DEFAULT_TAX_TABLE = RegionTaxTable(DEFAULT_REGION_RATES)


def load_region_tax_table(name: str = REGION_TAX_CSV, data_dir: str = DATA_DIR) -> RegionTaxTable:
    """Table from the data directory, or the compiled defaults when the file is absent."""

    try:
        table = RegionTaxTable.from_csv(name, data_dir)
    except FileNotFoundError:
        LOGGER.warning("region_tax_csv_missing name=%s; using compiled defaults", name)
        return DEFAULT_TAX_TABLE
    log_event(LOGGER, "region_tax_table_loaded", regions=len(table), default_rate=table.default_rate)
    return table


def estimate_property_tax(
    price: float,
    region_code: Optional[str] = None,
    actual_tax: Optional[float] = None,
    table: Optional[RegionTaxTable] = None,
) -> float:
    """Annual property tax: the actual figure when usable, else price x regional rate."""

    actual = positive_or_none(actual_tax)
    if actual is not None:
        return actual
    price = require_positive("price", price)
    rate = (table or DEFAULT_TAX_TABLE).rate_for(region_code)
    return price * rate / 100


def estimate_insurance(price: float, actual_insurance: Optional[float] = None) -> float:
    actual = positive_or_none(actual_insurance)
    if actual is not None:
        return actual
    return require_positive("price", price) * INSURANCE_RATE


__all__ = [
    "DEFAULT_TAX_RATE_PERCENT",
    "INSURANCE_RATE",
    "DEFAULT_REGION_RATES",
    "DEFAULT_TAX_TABLE",
    "RegionTaxTable",
    "load_region_tax_table",
    "estimate_property_tax",
    "estimate_insurance",
]
