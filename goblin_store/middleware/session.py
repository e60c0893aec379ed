"""
Session Cookie Middleware for FastAPI

Gives every browser a session id, the server-side equivalent of a browser
profile: the id scopes the persistent store that holds the cart.
"""

import re
import secrets

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from goblin_store import config
from goblin_store.db import TTL
from goblin_store.logging import current_session, get_logger, sanitize_id_for_logging

logger = get_logger(__name__)

# secrets.token_urlsafe(32) yields 43 characters of this alphabet
_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9_-]{16,64}$")


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def is_valid_session_id(value: str | None) -> bool:
    return bool(value) and bool(_SESSION_ID_RE.match(value))


class SessionCookieMiddleware(BaseHTTPMiddleware):
    """
    Reads the session cookie into ``request.state.session_id``.

    A missing or malformed cookie gets a fresh id, which is set on the
    response.
    """

    def __init__(self, app, cookie_name: str = config.SESSION_COOKIE_NAME, secure: bool = config.SESSION_COOKIE_SECURE):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.secure = secure

    async def dispatch(self, request: Request, call_next):
        session_id = request.cookies.get(self.cookie_name)
        is_new = not is_valid_session_id(session_id)
        if is_new:
            session_id = new_session_id()
            logger.debug(f"Started session {sanitize_id_for_logging(session_id)}")

        request.state.session_id = session_id
        token = current_session.set(session_id)
        try:
            response: Response = await call_next(request)
        finally:
            current_session.reset(token)

        if is_new:
            response.set_cookie(
                self.cookie_name,
                session_id,
                max_age=TTL.SESSION,
                httponly=True,
                samesite="lax",
                secure=self.secure,
            )
        return response
