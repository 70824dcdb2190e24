"""Shared fixtures: an in-memory stand-in for the listings store."""

from datetime import datetime
from decimal import Decimal

import pytest
from bson import ObjectId
from bson.decimal128 import Decimal128
from fastapi.testclient import TestClient

from gunpla_catalog.core.errors import StoreError
from gunpla_catalog.main import app
from gunpla_catalog.models import FieldCount
from gunpla_catalog.services.store import get_listing_store


def make_listing(name: str, grade: str = "HG", price: str = "25.00",
                 province: str = "ON", day: int = 1) -> dict:
    return {
        "_id": ObjectId(),
        "modelName": name,
        "modelGrade": grade,
        "price": Decimal128(Decimal(price)),
        "province": province,
        "timestamp": datetime(2024, 1, day, 12, 0),
    }


class FakeListingStore:
    """Returns canned documents and records every call.

    ``find_matching`` slices ``docs`` by skip/limit, ``count_matching``
    returns ``len(docs)``; filters are recorded, not evaluated.
    """

    def __init__(self, docs=None, groups=None, fail: bool = False, up: bool = True) -> None:
        self.docs = list(docs or [])
        self.groups = list(groups or [])
        self.fail = fail
        self.up = up
        self.find_calls = []
        self.count_calls = []
        self.group_calls = []

    def _check(self, op: str) -> None:
        if self.fail:
            raise StoreError(f"{op} failed", details={"reason": "connection refused"})

    async def find_matching(self, query, sort, skip, limit):
        self.find_calls.append({"query": query, "sort": sort, "skip": skip, "limit": limit})
        self._check("find")
        return self.docs[skip:skip + limit]

    async def count_matching(self, query):
        self.count_calls.append(query)
        self._check("count")
        return len(self.docs)

    async def group_by_field(self, field):
        self.group_calls.append(field)
        self._check("aggregate")
        return [FieldCount(key=k, count=c) for k, c in self.groups]

    async def ping(self):
        return self.up


@pytest.fixture
def listings() -> list:
    return [make_listing(f"RX-78-{i} Gundam", day=(i % 28) + 1) for i in range(25)]


@pytest.fixture
def store(listings) -> FakeListingStore:
    return FakeListingStore(docs=listings)


@pytest.fixture
def client(store):
    """Test client with the store dependency swapped for the fake."""
    app.dependency_overrides[get_listing_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
