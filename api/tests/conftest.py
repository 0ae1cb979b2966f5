"""Pytest configuration and shared fixtures for the docpager tests."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest
from bson import ObjectId
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docpager.config import Settings, get_settings
from docpager.main import create_app
from docpager.store import store_manager


# Disable logging for cleaner test output
logging.getLogger("asyncio").setLevel(logging.WARNING)
logging.getLogger("pymongo").setLevel(logging.WARNING)


def _matches(document: Dict[str, Any], filter: Dict[str, Any]) -> bool:
    """Evaluate the subset of the MongoDB query language the pagers emit.

    Missing fields read as null, null equals null and never satisfies $gt.
    """
    for key, condition in filter.items():
        value = document.get(key)
        if key == "$or":
            if not any(_matches(document, clause) for clause in condition):
                return False
        elif isinstance(condition, dict) and "$gt" in condition:
            if value is None or not value > condition["$gt"]:
                return False
        elif isinstance(condition, dict) and "$ne" in condition:
            if value == condition["$ne"]:
                return False
        elif value != condition:
            return False
    return True


def _sort_key(document: Dict[str, Any], field: str) -> Tuple[bool, Any]:
    """Nulls and missing fields sort before every other value."""
    value = document.get(field)
    return (value is not None, value)


class FakeDocumentStore:
    """In-memory DocumentStore with filter, multi-key ascending sort and limit."""

    def __init__(self, documents: Optional[List[Dict[str, Any]]] = None, collection_name: str = "docs"):
        self.collections: Dict[str, List[Dict[str, Any]]] = {collection_name: list(documents or [])}
        self.calls: List[Tuple[str, Dict[str, Any], List[Tuple[str, int]], int]] = []
        self.error: Optional[Exception] = None
        self.closed = False
        self.pings = 0

    async def query(
        self,
        collection_name: str,
        filter: Dict[str, Any],
        sort: Sequence[Tuple[str, int]],
        limit: int
    ) -> List[Dict[str, Any]]:
        self.calls.append((collection_name, filter, list(sort), limit))
        if self.error is not None:
            raise self.error
        documents = [doc for doc in self.collections.get(collection_name, []) if _matches(doc, filter)]
        for field, direction in reversed(list(sort)):
            documents.sort(key=lambda doc: _sort_key(doc, field), reverse=direction < 0)
        return [dict(doc) for doc in documents[:limit]]

    async def ping(self) -> None:
        self.pings += 1
        if self.error is not None:
            raise self.error

    async def close(self) -> None:
        self.closed = True


def make_object_ids(count: int) -> List[ObjectId]:
    """Deterministic, strictly increasing ObjectIds."""
    return [ObjectId(f"{i:024x}") for i in range(1, count + 1)]


@pytest.fixture
def object_ids() -> List[ObjectId]:
    return make_object_ids(25)


@pytest.fixture
def movie_documents(object_ids) -> List[Dict[str, Any]]:
    """25 documents inserted out of identifier order."""
    docs = [
        {"_id": oid, "title": f"Movie {n}", "year": 1900 + (n % 5)}
        for n, oid in enumerate(object_ids, start=1)
    ]
    return list(reversed(docs))


@pytest.fixture
def fake_store(movie_documents) -> FakeDocumentStore:
    return FakeDocumentStore(movie_documents, collection_name="movies")


@pytest.fixture
def empty_store() -> FakeDocumentStore:
    return FakeDocumentStore(collection_name="movies")


@pytest.fixture
def int_store() -> FakeDocumentStore:
    """Collection with integer identifiers 1..25."""
    return FakeDocumentStore([{"_id": n, "value": n * n} for n in range(25, 0, -1)], collection_name="numbers")


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests, independent of the environment."""
    return Settings(
        _env_file=None,
        mongodb_uri="mongodb://localhost:27017",
        mongodb_database="sample_mflix",
        mongodb_collection="movies",
        monitor_commands=False,
        log_level="ERROR",
        default_page_size=10,
        max_page_size=100
    )


@pytest.fixture
def app(test_settings: Settings, fake_store: FakeDocumentStore) -> FastAPI:
    """FastAPI application wired to the in-memory store."""
    application = create_app()
    application.dependency_overrides[get_settings] = lambda: test_settings
    store_manager.store = fake_store
    yield application
    store_manager.store = None


@pytest.fixture
def test_client(app: FastAPI) -> TestClient:
    """Test client that does not run the lifespan (no real MongoDB)."""
    return TestClient(app)
