"""
Tests for the per-session cart provider
"""

import pytest

from goblin_store.cart import CartProvider, Product, encode_products


def test_same_session_gets_same_cart(provider):
    """Every consumer in a session shares one CartState."""
    first = provider.cart_for("session-a")
    second = provider.cart_for("session-a")

    assert first is second


def test_mutation_visible_to_other_consumers(provider, product):
    provider.cart_for("session-a").add_to_cart(product)

    assert provider.cart_for("session-a").products == [product]


def test_sessions_are_isolated(provider, product, session_stores):
    provider.cart_for("session-a").add_to_cart(product)

    assert provider.cart_for("session-b").products == []
    assert "products" not in session_stores["session-b"].data


def test_store_for_returns_cart_store(provider, session_stores):
    store = provider.store_for("session-a")

    assert store is session_stores["session-a"]
    assert store is provider.cart_for("session-a").store


def test_hydrates_from_existing_store(provider, session_stores, make_store, product):
    session_stores["session-a"] = make_store({"products": encode_products([product, product])})

    assert provider.cart_for("session-a").products == [product, product]


def test_evicted_session_rehydrates(session_stores, make_store):
    """An evicted cart comes back with the same products from its store."""
    def factory(session_id):
        return session_stores.setdefault(session_id, make_store())

    provider = CartProvider(factory, max_sessions=2)
    item = Product(name="Potion", price=5, image="/potion.png")

    original = provider.cart_for("s1")
    original.add_to_cart(item)
    provider.cart_for("s2")
    provider.cart_for("s3")

    assert len(provider) == 2
    assert "s1" not in provider

    restored = provider.cart_for("s1")
    assert restored is not original
    assert restored.products == [item]


def test_recently_used_session_is_kept(session_stores, make_store):
    def factory(session_id):
        return session_stores.setdefault(session_id, make_store())

    provider = CartProvider(factory, max_sessions=2)
    first = provider.cart_for("s1")
    provider.cart_for("s2")
    provider.cart_for("s1")
    provider.cart_for("s3")

    assert "s1" in provider
    assert "s2" not in provider
    assert provider.cart_for("s1") is first


def test_invalid_max_sessions(make_store):
    with pytest.raises(ValueError):
        CartProvider(lambda session_id: make_store(), max_sessions=0)
