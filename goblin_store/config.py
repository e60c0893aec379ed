"""Storefront configuration read from the environment."""
import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
DEFAULT_CATALOG_PATH = PACKAGE_DIR / "data" / "products.json"


def _get_bool(key: str, default: bool = False) -> bool:
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


STORE_TITLE = os.environ.get("STORE_TITLE", "Goblin Store")
CURRENCY_LABEL = os.environ.get("CURRENCY_LABEL", "Zm")

# http(s) URL or filesystem path of the catalog JSON
CATALOG_SOURCE = os.environ.get("CATALOG_SOURCE", str(DEFAULT_CATALOG_PATH))
CATALOG_TIMEOUT = float(os.environ.get("CATALOG_TIMEOUT", "5.0"))

SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "goblin_session")
SESSION_COOKIE_SECURE = _get_bool("SESSION_COOKIE_SECURE", default=False)

# Carts kept hydrated in memory; older sessions re-hydrate from Redis on next access
MAX_ACTIVE_SESSIONS = int(os.environ.get("MAX_ACTIVE_SESSIONS", "1000"))

GOBLIN_ENV = os.environ.get("GOBLIN_ENV", "development")
