"""
Global pytest fixtures for the Edgelink test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide an isolated in-memory Storage for direct testing
    - Provide an allocator/resolver pair wired to that Storage
    - Provide a store double whose every operation fails, for 500 paths

Why an app factory?
    Using `create_app()` gives each test its own store, so links created in one
    test never leak into another.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from edgelink.errors import StoreError
from edgelink.manager.allocator import IdentifierAllocator
from edgelink.manager.resolver import RedirectResolver
from edgelink.storage.base import BaseStorage
from edgelink.storage.storage import Storage


class FailingStorage(BaseStorage):
    """Store double that raises StoreError on every call and records attempts."""

    def __init__(self):
        self.attempts = []

    def _fail(self, op, *args):
        self.attempts.append((op, args))
        raise StoreError(f"{op} failed: store unreachable")

    def get(self, key):
        self._fail("get", key)

    def put(self, key, value):
        self._fail("put", key, value)

    def exists(self, key):
        self._fail("exists", key)

    def put_if_absent(self, key, value):
        self._fail("put_if_absent", key, value)


@pytest.fixture
def storage() -> Storage:
    """Fresh in-memory store per test."""
    return Storage()


@pytest.fixture
def failing_storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture
def allocator(storage: Storage) -> IdentifierAllocator:
    return IdentifierAllocator(storage=storage)


@pytest.fixture
def resolver(storage: Storage) -> RedirectResolver:
    return RedirectResolver(storage=storage)


@pytest.fixture
def client(storage: Storage) -> TestClient:
    """
    TestClient over a new app bound to the `storage` fixture.

    Background mode is the default: TestClient runs background tasks before
    returning, so a created link is readable right after the POST.
    """
    app = create_app(storage=storage, write_mode="background")
    return TestClient(app)


@pytest.fixture
def sync_client(storage: Storage) -> TestClient:
    """TestClient over an app that writes generated ids before responding."""
    app = create_app(storage=storage, write_mode="sync")
    return TestClient(app)
