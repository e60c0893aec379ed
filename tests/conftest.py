"""Pytest configuration and fixtures"""
import os
from typing import Dict, Optional

import pytest

# Redis credentials are only read lazily; tests never reach Redis
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from goblin_store.cart import CartProvider, Product
from goblin_store.catalog import Category, CatalogState
from goblin_store.errors import StorageUnavailableError


class InMemoryStore:
    """Dict-backed KeyValueStore standing in for a session's Redis namespace."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class BrokenStore(InMemoryStore):
    """Store whose reads and writes fail like an unreachable Redis."""

    def get(self, key: str) -> Optional[str]:
        raise StorageUnavailableError(key=key)

    def set(self, key: str, value: str) -> None:
        raise StorageUnavailableError(key=key)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def product():
    return Product(name="Product foo", price=0, image="image.jpg")


@pytest.fixture
def sample_catalog():
    return CatalogState(
        categories=[
            Category(
                name="Category Foo",
                items=[Product(name="Product foo", price=55, image="/test.jpg")],
            )
        ],
        is_loading=False,
        error=False,
    )


@pytest.fixture
def session_stores():
    """Stores created by the provider, keyed by session id."""
    return {}


@pytest.fixture
def provider(session_stores):
    def factory(session_id: str) -> InMemoryStore:
        return session_stores.setdefault(session_id, InMemoryStore())

    return CartProvider(factory, max_sessions=10)


@pytest.fixture
def client(provider, sample_catalog):
    """Test client with an in-memory cart provider and a fixed catalog"""
    from fastapi.testclient import TestClient

    from api.index import app
    from goblin_store.catalog import use_products
    from goblin_store.routers.deps import get_cart_provider

    async def fixed_catalog():
        return sample_catalog

    app.dependency_overrides[get_cart_provider] = lambda: provider
    app.dependency_overrides[use_products] = fixed_catalog
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_store():
    """Build an InMemoryStore, optionally pre-filled: make_store({"products": "[]"})"""
    return InMemoryStore


@pytest.fixture
def broken_store():
    return BrokenStore()
