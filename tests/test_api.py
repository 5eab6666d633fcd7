from fastapi.testclient import TestClient

from listing_insights.api import app

client = TestClient(app)


def test_health():
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_listing_analysis_endpoint():
    resp = client.get("/api/listings/L-1001/analysis")
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["listing_id"] == "L-1001"
    assert abs(payload["selected_scenario"]["total_monthly_payment"] - 2555.95) <= 0.5
    assert len(payload["scenarios"]) == 6
    assert isinstance(payload["walkability"]["score"], int)


def test_listing_analysis_with_income():
    resp = client.get("/api/listings/L-1001/analysis", params={"buyer_annual_income": 60_000})
    assert resp.status_code == 200
    assert resp.json()["affordability"]["rating"] == "not_affordable"


def test_priceless_listing_asks_for_contact():
    resp = client.get("/api/listings/L-1003/analysis")
    assert resp.status_code == 200
    assert resp.json()["price_display"] == "Contact for pricing"


def test_unknown_listing_is_404():
    assert client.get("/api/listings/missing/analysis").status_code == 404


def test_payment_endpoint():
    resp = client.post(
        "/api/calculate/payment",
        json={"price": 400_000, "annual_property_tax": 4_800, "annual_insurance": 1_600},
    )
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["loan_amount"] == 320_000
    assert payload["monthly_principal_interest"] == 2022.62
    assert payload["monthly_pmi"] == 0


def test_payment_endpoint_rejects_invalid_price():
    resp = client.post("/api/calculate/payment", json={"price": 0})
    assert resp.status_code == 422
    assert resp.json()["detail"]["field"] == "price"


def test_scenarios_endpoint():
    resp = client.post("/api/calculate/scenarios", json={"price": 400_000, "region_code": "DE-SC"})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["total"] == 6
    assert [item["down_payment_percent"] for item in payload["items"]] == [5, 10, 15, 20, 25, 30]
    assert payload["items"][0]["monthly_pmi"] > 0
    assert payload["items"][3]["monthly_pmi"] == 0


def test_walkability_endpoint():
    resp = client.post(
        "/api/calculate/walkability",
        json={"observations": [{"category": "restaurant", "distance_miles": 0.25}, {"category": "grocery", "distance_miles": 0.4}]},
    )
    assert resp.status_code == 200
    assert resp.json()["score"] == 11
    assert resp.json()["tier"] == "Car-Dependent"


def test_walkability_endpoint_rejects_unknown_category():
    resp = client.post("/api/calculate/walkability", json={"observations": [{"category": "nightclub", "distance_miles": 0.1}]})
    assert resp.status_code == 422


def test_list_listings_filters_by_city():
    resp = client.get("/api/listings", params={"city": "lewes"})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["total"] == 1
    assert payload["items"][0]["id"] == "L-1001"
    assert payload["items"][0]["price_display"] == "$400K"


def test_list_listings_shows_contact_for_missing_price():
    items = client.get("/api/listings").json()["items"]
    dover = next(item for item in items if item["id"] == "L-1003")
    assert dover["price_display"] == "Contact for pricing"
