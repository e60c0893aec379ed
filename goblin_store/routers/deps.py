"""
Shared Dependencies for Routers

The cart provider is a lazy singleton so importing the app does not touch
Redis. Tests replace it through ``app.dependency_overrides``.

Cart dependencies are ``async def`` so they run on the event loop, one
request at a time, never in the threadpool.
"""

from typing import Optional

from fastapi import Depends, Request

from goblin_store import config
from goblin_store.cart import CartProvider, CartState
from goblin_store.db import KeyValueStore, open_session_store

_cart_provider: Optional[CartProvider] = None


def get_cart_provider() -> CartProvider:
    """Get or create the CartProvider singleton (Redis-backed)."""
    global _cart_provider
    if _cart_provider is None:
        _cart_provider = CartProvider(open_session_store, max_sessions=config.MAX_ACTIVE_SESSIONS)
    return _cart_provider


async def get_session_id(request: Request) -> str:
    """Session id assigned by SessionCookieMiddleware."""
    return request.state.session_id


async def get_cart(
    session_id: str = Depends(get_session_id),
    provider: CartProvider = Depends(get_cart_provider),
) -> CartState:
    """The current session's cart."""
    return provider.cart_for(session_id)


async def get_session_store(
    session_id: str = Depends(get_session_id),
    provider: CartProvider = Depends(get_cart_provider),
) -> KeyValueStore:
    """The current session's persistent store."""
    return provider.store_for(session_id)
