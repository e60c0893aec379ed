"""Cart package: product model, cart state, and per-session provider."""
from .models import Product, decode_products, encode_products
from .service import CartState
from .context import CartProvider

__all__ = [
    "Product",
    "decode_products",
    "encode_products",
    "CartState",
    "CartProvider",
]
