"""Jinja2 templates shared by the HTML views and error handlers."""
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from goblin_store import config
from goblin_store.money import format_price

templates = Jinja2Templates(directory=str(config.TEMPLATES_DIR))
templates.env.filters["price"] = format_price


def render(request: Request, name: str, ctx: dict[str, Any], status_code: int = 200) -> HTMLResponse:
    base = {"store_title": config.STORE_TITLE}
    base.update(ctx)
    return templates.TemplateResponse(request, name, base, status_code=status_code)
