"""
Product API - Test Configuration (conftest.py)
===============================================

Shared pytest fixtures for the test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_collection:  AsyncMock stand-in for a pymongo AsyncCollection
    ├── fake_collection:  in-memory collection honouring the calls the service makes
    ├── mock_db_context:  ProductDbContext stand-in with an awaitable ping()
    ├── test_client:      HTTPX AsyncClient wired to the app with the
    │                     collection dependencies overridden
    └── lenient_client:   same, but unhandled errors arrive as 500 responses
"""

import os

# Settings are read at import time; point them at a throwaway database
# before anything under app/ is imported.
os.environ["MONGODB_CONNECTION_STRING"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE_NAME"] = "product_api_test"
os.environ["MONGODB_COLLECTION_NAME"] = "products"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict, List, Mapping, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from app.database import get_db_context, get_product_collection


class FakeCursor:
    """Result of FakeProductCollection.find(); only to_list() is used."""

    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return list(self._documents if length is None else self._documents[:length])


class FakeProductCollection:
    """
    In-memory collection for endpoint tests.

    Supports the operations ProductService issues: find({}), find_one,
    insert_one, replace_one and delete_one, each filtering on _id equality.
    Documents keep insertion order, like a natural-order scan.
    """

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}

    @staticmethod
    def _target(filter: Mapping[str, Any]) -> Optional[ObjectId]:
        return filter.get("_id")

    def find(self, filter: Mapping[str, Any]) -> FakeCursor:
        assert filter == {}, "only unconditional scans are expected"
        return FakeCursor([dict(doc) for doc in self.documents.values()])

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self.documents.get(self._target(filter))
        return dict(doc) if doc is not None else None

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        assert "_id" not in document
        oid = ObjectId()
        self.documents[oid] = {"_id": oid, **document}
        return InsertOneResult(oid, True)

    async def replace_one(self, filter: Mapping[str, Any], replacement: Dict[str, Any]) -> UpdateResult:
        assert "_id" not in replacement
        oid = self._target(filter)
        if oid not in self.documents:
            return UpdateResult({"n": 0, "nModified": 0}, True)
        self.documents[oid] = {"_id": oid, **replacement}
        return UpdateResult({"n": 1, "nModified": 1}, True)

    async def delete_one(self, filter: Mapping[str, Any]) -> DeleteResult:
        oid = self._target(filter)
        if self.documents.pop(oid, None) is None:
            return DeleteResult({"n": 0}, True)
        return DeleteResult({"n": 1}, True)


@pytest.fixture
def mock_collection():
    """
    AsyncMock collection for service unit tests.

    Usage:
        mock_collection.find_one.return_value = {"_id": oid, "Name": "x"}
        await product_service.get_product(mock_collection, str(oid))
    """
    collection = MagicMock()
    collection.find_one = AsyncMock()
    collection.insert_one = AsyncMock()
    collection.replace_one = AsyncMock()
    collection.delete_one = AsyncMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def fake_collection():
    return FakeProductCollection()


@pytest.fixture
def mock_db_context():
    context = MagicMock()
    context.ping = AsyncMock(return_value={"ok": 1.0})
    context.close = AsyncMock()
    return context


@pytest.fixture
def sample_document():
    """A stored product document in the collection's element layout."""
    return {
        "_id": ObjectId("65f1c0a1b2c3d4e5f6a7b8c9"),
        "Name": "Widget",
        "Description": "A small widget",
        "Quantity": 5,
    }


@pytest_asyncio.fixture
async def test_client(fake_collection, mock_db_context):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The lifespan does not run under ASGITransport, so the collection and
    context dependencies are overridden instead of connecting to MongoDB.
    """
    from app.main import app

    app.dependency_overrides[get_product_collection] = lambda: fake_collection
    app.dependency_overrides[get_db_context] = lambda: mock_db_context
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def lenient_client(fake_collection, mock_db_context):
    """
    Like test_client, but unhandled exceptions come back as the 500 the
    catch-all handler renders instead of being re-raised into the test.
    """
    from app.main import app

    app.dependency_overrides[get_product_collection] = lambda: fake_collection
    app.dependency_overrides[get_db_context] = lambda: mock_db_context
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
