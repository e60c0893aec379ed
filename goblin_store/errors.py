"""
Common Error Constants and Exceptions

Centralized error messages shared by the routers and exception handlers.
"""

ERROR_NOT_FOUND = "Not found"
ERROR_CART_UNAVAILABLE = "Cart service unavailable"


class StorageUnavailableError(ValueError):
    """Persistent store could not be read or written."""

    def __init__(self, message: str = ERROR_CART_UNAVAILABLE, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
