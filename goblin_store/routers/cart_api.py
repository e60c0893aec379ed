"""
Cart JSON API

Same cart as the HTML views, for scripts and clients that want JSON.
"""
from fastapi import APIRouter, Depends

from goblin_store.cart import CartState
from goblin_store.money import to_float
from .deps import get_cart
from .models import CartResponse, ProductPayload

router = APIRouter(prefix="/api", tags=["cart-api"])


def _cart_response(cart: CartState) -> CartResponse:
    return CartResponse(
        products=[p.to_dict() for p in cart.products],
        total=to_float(cart.total_price()),
        count=cart.count,
    )


@router.get("/cart", response_model=CartResponse)
async def get_cart_contents(cart: CartState = Depends(get_cart)):
    return _cart_response(cart)


@router.post("/cart/items", response_model=CartResponse)
async def add_item(payload: ProductPayload, cart: CartState = Depends(get_cart)):
    cart.add_to_cart(payload.to_product())
    return _cart_response(cart)


@router.post("/cart/items/remove", response_model=CartResponse)
async def remove_item(payload: ProductPayload, cart: CartState = Depends(get_cart)):
    cart.remove_from_cart(payload.to_product())
    return _cart_response(cart)


@router.delete("/cart", response_model=CartResponse)
async def clear(cart: CartState = Depends(get_cart)):
    cart.clear_cart()
    return _cart_response(cart)
