import pandas as pd
import pytest

from listing_insights.errors import InvalidInput
from listing_insights.services.costs import (
    DEFAULT_TAX_TABLE,
    RegionTaxTable,
    estimate_insurance,
    estimate_property_tax,
    load_region_tax_table,
)


def test_actual_tax_is_returned_verbatim():
    assert estimate_property_tax(400_000, "DE-SC", actual_tax=5_123.45) == 5_123.45


@pytest.mark.parametrize("actual", [None, 0, -10, "n/a", float("nan"), float("inf")])
def test_unusable_actual_tax_falls_back_to_estimate(actual):
    assert estimate_property_tax(400_000, "DE-SC", actual_tax=actual) == pytest.approx(1_720)


def test_unknown_region_uses_default_rate():
    assert estimate_property_tax(400_000, "ZZ") == pytest.approx(4_800)
    assert estimate_property_tax(400_000, None) == pytest.approx(4_800)


def test_region_codes_are_case_insensitive():
    assert estimate_property_tax(100_000, " de-ncc ") == pytest.approx(540)
    assert "de-kc" in DEFAULT_TAX_TABLE


def test_custom_table_and_default():
    table = RegionTaxTable({"TX": 1.6}, default_rate=2.0)
    assert estimate_property_tax(300_000, "TX", table=table) == pytest.approx(4_800)
    assert estimate_property_tax(300_000, "DE", table=table) == pytest.approx(6_000)


def test_table_is_read_only():
    table = RegionTaxTable({"TX": 1.6})
    copy = table.to_dict()
    copy["TX"] = 99
    assert table.rate_for("TX") == 1.6


def test_table_rejects_negative_rates():
    with pytest.raises(InvalidInput):
        RegionTaxTable({"TX": -1})


def test_table_from_csv(tmp_path):
    pd.DataFrame({"region_code": ["tx", "CA"], "rate_percent": [1.6, 0.71]}).to_csv(tmp_path / "rates.csv", index=False)
    table = RegionTaxTable.from_csv("rates.csv", data_dir=str(tmp_path))
    assert table.rate_for("TX") == pytest.approx(1.6)
    assert len(table) == 2


def test_table_from_frame_requires_columns():
    with pytest.raises(ValueError):
        RegionTaxTable.from_frame(pd.DataFrame({"region": ["TX"], "rate": [1.6]}))


def test_missing_csv_uses_compiled_defaults(tmp_path):
    assert load_region_tax_table(data_dir=str(tmp_path)) is DEFAULT_TAX_TABLE


def test_insurance_estimate():
    assert estimate_insurance(400_000, 1_600) == 1_600
    assert estimate_insurance(400_000) == pytest.approx(1_600)
    assert estimate_insurance(250_000, 0) == pytest.approx(1_000)


def test_estimates_require_a_price():
    with pytest.raises(InvalidInput):
        estimate_property_tax(0, "DE")
    with pytest.raises(InvalidInput):
        estimate_insurance(-5)


def test_compiled_defaults_cover_delaware_counties():
    assert DEFAULT_TAX_TABLE.to_dict() == {"DE": 0.50, "DE-NCC": 0.54, "DE-KC": 0.51, "DE-SC": 0.43}
    assert DEFAULT_TAX_TABLE.rate_for("de-sc") == 0.43
