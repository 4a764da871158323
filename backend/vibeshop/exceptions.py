import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError

log = logging.getLogger("storage")


class ShopError(Exception):
    """Base for errors that are reported to API callers as {error, message}."""

    status_code = 500

    def __init__(self, error: str, message: Optional[str] = None):
        super().__init__(error)
        self.error = error
        self.message = message

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        return body


class ValidationError(ShopError):
    """Malformed or missing input."""

    status_code = 400


class NotFoundError(ShopError):
    """A referenced product, cart, cart item or order does not exist."""

    status_code = 404


class InsufficientStockError(ShopError):
    status_code = 400


class StorageFault(ShopError):
    """The backing store failed; carries the driver message."""

    status_code = 500


@contextmanager
def storage_errors(summary: str) -> Iterator:
    """
    Translate SQLAlchemy and driver overflow failures inside the block into a StorageFault.
    Usage:
        with storage_errors("Failed to fetch cart"):
            ... DB work ...
    """
    try:
        yield
    except (SQLAlchemyError, OverflowError) as e:
        log.exception(summary)
        raise StorageFault(summary, str(e)) from e
