from .pages import router as pages_router
from .cart_api import router as cart_api_router

__all__ = ["pages_router", "cart_api_router"]
