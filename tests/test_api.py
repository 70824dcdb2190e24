"""Tests for the HTTP endpoints."""

from fastapi.testclient import TestClient

from gunpla_catalog.main import app
from gunpla_catalog.services.store import get_listing_store

from conftest import FakeListingStore


def test_search_first_page(client: TestClient, store) -> None:
    response = client.get("/api/v1/listings", params={"province": "ON", "sortBy": "price"})
    assert response.status_code == 200

    data = response.json()
    assert data["totalMatching"] == 25
    assert len(data["listings"]) == 10
    assert data["pageNumber"] == 1
    assert data["hasNext"] is True
    assert data["hasPrevious"] is False
    assert data["appliedFilter"] == {"province": "ON"}
    assert data["sort"] == [{"field": "price", "direction": "asc"}]
    assert data["listings"][0]["price"] == "25.00"
    assert "status_code" not in data
    assert store.find_calls[0]["query"] == {"province": "ON"}


def test_search_params_arrive_as_strings(client: TestClient, store) -> None:
    response = client.get("/api/v1/listings?page=3&minPrice=1&maxPrice=1010")
    assert response.status_code == 200
    assert response.json()["hasNext"] is False
    assert store.find_calls[0]["skip"] == 20


def test_search_validation_failure(client: TestClient) -> None:
    response = client.get("/api/v1/listings", params={"startDate": "2024-05-01", "endDate": "2024-01-01"})
    assert response.status_code == 400
    assert response.json() == {
        "errorMessage": "startDate greater than endDate",
        "listings": [],
        "pageNumber": None,
        "hasNext": None,
        "hasPrevious": None,
        "appliedFilter": None,
    }


def test_search_store_failure() -> None:
    app.dependency_overrides[get_listing_store] = lambda: FakeListingStore(fail=True)
    try:
        response = TestClient(app).get("/api/v1/listings")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    assert "connection refused" not in response.text


def test_index(client: TestClient, store) -> None:
    store.groups = [("Zaku", 2), ("Gundam", 1)]
    response = client.get("/api/v1/listings/index")
    assert response.status_code == 200

    data = response.json()
    assert data["message"] == "25 Total Entries"
    assert data["empty"] is False
    assert data["groupedListings"] == {
        "G": [{"modelName": "Gundam", "totalEntries": 1}],
        "Z": [{"modelName": "Zaku", "totalEntries": 2}],
    }


def test_index_empty(client: TestClient, store) -> None:
    store.docs = []
    data = client.get("/api/v1/listings/index").json()
    assert data == {"message": "No Entries", "empty": True, "groupedListings": None}


def test_health(client: TestClient, store) -> None:
    assert client.get("/api/v1/health").json() == {"status": "ok", "store": "up"}
    store.up = False
    assert client.get("/api/v1/health").json() == {"status": "ok", "store": "down"}
