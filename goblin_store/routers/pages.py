"""
Storefront Pages Router

HTML views (catalog, cart, checkout, order summary) and the form actions
that mutate the cart. Actions answer with a 303 redirect back to a page.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from goblin_store.cart import CartState
from goblin_store.catalog import CatalogState, use_products
from goblin_store.db import KeyValueStore
from goblin_store.logging import get_logger
from goblin_store.orders import get_last_order, place_order
from .deps import get_cart, get_session_store
from .models import CheckoutForm, ProductForm
from .templating import render

logger = get_logger(__name__)

router = APIRouter(tags=["pages"])


def _safe_next(target: Optional[str], default: str) -> str:
    """Only redirect to local paths."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return default
    return target


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    catalog: CatalogState = Depends(use_products),
    cart: CartState = Depends(get_cart),
):
    return render(request, "home.html", {"catalog": catalog, "cart": cart, "cart_count": cart.count})


@router.get("/cart", response_class=HTMLResponse)
async def cart_page(request: Request, cart: CartState = Depends(get_cart)):
    return render(
        request,
        "cart.html",
        {"products": cart.products, "total": cart.total_price(), "cart_count": cart.count},
    )


@router.get("/checkout", response_class=HTMLResponse)
async def checkout_page(request: Request, cart: CartState = Depends(get_cart)):
    return _render_checkout(request, cart, form={}, errors={})


def _render_checkout(request: Request, cart: CartState, form: dict, errors: dict, status_code: int = 200):
    return render(
        request,
        "checkout.html",
        {
            "products": cart.products,
            "total": cart.total_price(),
            "cart_count": cart.count,
            "form": form,
            "errors": errors,
        },
        status_code=status_code,
    )


@router.post("/checkout")
async def checkout_submit(request: Request, cart: CartState = Depends(get_cart)):
    if cart.count == 0:
        return _redirect("/cart")

    form = {key: value for key, value in (await request.form()).items() if isinstance(value, str)}
    try:
        data = CheckoutForm.model_validate(form)
    except ValidationError as e:
        errors = {".".join(str(loc) for loc in err["loc"]): err["msg"] for err in e.errors()}
        logger.debug(f"Checkout form rejected: {sorted(errors)}")
        return _render_checkout(request, cart, form=form, errors=errors, status_code=422)

    place_order(cart, customer_name=data.name, address=data.address)
    return _redirect("/order")


@router.get("/order", response_class=HTMLResponse)
async def order_summary(
    request: Request,
    cart: CartState = Depends(get_cart),
    store: KeyValueStore = Depends(get_session_store),
):
    order = get_last_order(store)
    return render(request, "order.html", {"order": order, "cart_count": cart.count})


# ---------------- cart actions ----------------

@router.post("/cart/add")
async def cart_add(form: Annotated[ProductForm, Form()], cart: CartState = Depends(get_cart)):
    cart.add_to_cart(form.to_product())
    return _redirect(_safe_next(form.next, "/"))


@router.post("/cart/remove")
async def cart_remove(form: Annotated[ProductForm, Form()], cart: CartState = Depends(get_cart)):
    cart.remove_from_cart(form.to_product())
    return _redirect(_safe_next(form.next, "/cart"))


@router.post("/cart/clear")
async def cart_clear(next: Annotated[Optional[str], Form()] = None, cart: CartState = Depends(get_cart)):
    cart.clear_cart()
    return _redirect(_safe_next(next, "/cart"))
