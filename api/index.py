"""
Goblin Store - Main FastAPI Application

Single entry point for the storefront pages and the cart JSON API.

Routes:
- /          catalog
- /cart      cart
- /checkout  checkout
- /order     order summary
- anything else renders the "Page not found" view
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from goblin_store import __version__, config
from goblin_store.errors import (
    ERROR_CART_UNAVAILABLE,
    ERROR_NOT_FOUND,
    StorageUnavailableError,
)
from goblin_store.logging import get_logger
from goblin_store.middleware import SessionCookieMiddleware
from goblin_store.routers import cart_api_router, pages_router
from goblin_store.routers.templating import render

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info(f"{config.STORE_TITLE} starting ({config.GOBLIN_ENV})")
    yield
    logger.info(f"{config.STORE_TITLE} stopped")


app = FastAPI(
    title=config.STORE_TITLE,
    description="Storefront with a session cart mirrored to Redis",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(SessionCookieMiddleware)

app.include_router(cart_api_router)
app.include_router(pages_router)


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api/")


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "goblin-store"}


# ==================== ERROR HANDLERS ====================

@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unknown paths render the not-found view; other HTTP errors keep FastAPI's default."""
    if exc.status_code != 404:
        return await http_exception_handler(request, exc)
    if _wants_json(request):
        return JSONResponse(status_code=404, content={"detail": exc.detail or ERROR_NOT_FOUND})
    return render(request, "not_found.html", {}, status_code=404)


@app.exception_handler(StorageUnavailableError)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
    """The cart changed in memory but could not be persisted."""
    logger.error(f"Storage unavailable on {request.method} {request.url.path}: {exc}")
    if _wants_json(request):
        return JSONResponse(status_code=503, content={"detail": ERROR_CART_UNAVAILABLE})
    return render(request, "error.html", {"message": ERROR_CART_UNAVAILABLE}, status_code=503)
