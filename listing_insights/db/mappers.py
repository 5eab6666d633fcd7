from typing import Any, Dict

from ..utils.coerce import to_float, to_str


def map_listing_row(r: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": to_str(r.get("id") or r.get("listing_id")),
        "address": to_str(r.get("address") or r.get("street_address")),
        "city": to_str(r.get("city")),
        "state": to_str(r.get("state")).upper(),
        "zipcode": to_str(r.get("zipcode") or r.get("zip")).split(".")[0],
        "region_code": to_str(r.get("region_code") or r.get("state")).upper(),
        "price": to_float(r.get("price") or r.get("listing_price")),
        "property_tax_annual": to_float(r.get("property_tax_annual")),
        "insurance_annual": to_float(r.get("insurance_annual")),
        "hoa_monthly": to_float(r.get("hoa_monthly")),
        "estimated_value": to_float(r.get("estimated_value") or r.get("estimated_market_value")),
        "comparable_average": to_float(r.get("comparable_average") or r.get("comparable_sales_avg_price")),
        "market_position": to_str(r.get("market_position")) or None,
        "est_monthly_rent": to_float(r.get("est_monthly_rent") or r.get("rental_potential_monthly")),
        "latitude": to_float(r.get("latitude")),
        "longitude": to_float(r.get("longitude")),
    }


def map_amenity_row(r: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "listing_id": to_str(r.get("listing_id")),
        "category": to_str(r.get("category") or r.get("type")),
        "name": to_str(r.get("name")),
        "distance_miles": to_float(r.get("distance_miles") if r.get("distance_miles") is not None else r.get("distance")),
        "latitude": to_float(r.get("latitude")),
        "longitude": to_float(r.get("longitude")),
    }
