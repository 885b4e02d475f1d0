"""Integration tests for the /dashboard endpoint."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration

Payload = Callable[..., dict[str, Any]]


def test_dashboard_counts_itineraries_and_vouchers(client: TestClient, payload: Payload) -> None:
    first = client.post("/itineraries", json=payload()).json()
    client.post(
        "/itineraries",
        json=payload(company="TRAVEL_TRAIL_HOLIDAYS", client_phone="9000000002"),
    )
    client.post(
        "/vouchers",
        json={
            "travel_id": first["travel_id"],
            "client_name": "Asha Verma",
            "adult_no": 2,
            "children_no": 1,
            "total_nights": 1,
            "hotel_stays": [{"hotel_name": "Lake View", "nights": 1}],
            "cab_details": "Sedan",
        },
    )

    response = client.get("/dashboard")

    assert response.status_code == 200
    stats = response.json()
    assert stats["total_itineraries"] == 2
    assert {c["prefix"]: c["count"] for c in stats["itineraries_by_company"]} == {
        "TRL": 1,
        "TTH": 1,
    }
    assert stats["itineraries_by_advisor"] == [{"advisor": "Ravi", "count": 2}]
    assert {c["prefix"]: c["count"] for c in stats["vouchers_by_company"]} == {"TRL": 1, "TTH": 0}
    assert stats["vouchers_with_hotels"] == 1
    assert stats["vouchers_without_hotels"] == 0
    assert stats["total_voucher_nights"] == 1
    assert stats["total_voucher_guests"] == 3


def test_dashboard_range_before_any_record_is_empty(client: TestClient, payload: Payload) -> None:
    client.post("/itineraries", json=payload())

    response = client.get(
        "/dashboard", params={"date_from": "2000-01-01T00:00:00", "date_to": "2000-12-31T23:59:59"}
    )

    assert response.status_code == 200
    assert response.json()["total_itineraries"] == 0


def test_dashboard_reversed_range_returns_422(client: TestClient) -> None:
    response = client.get(
        "/dashboard", params={"date_from": "2026-05-01T00:00:00", "date_to": "2026-04-01T00:00:00"}
    )

    assert response.status_code == 422
