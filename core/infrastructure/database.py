"""
Database utilities shared by the ORM adapters.
"""

import functools
import logging

from django.db import DatabaseError

from core.domain.exceptions import StorageFault

logger = logging.getLogger(__name__)


def translate_storage_errors(func):
    """
    Re-raise database driver errors as ``StorageFault``.

    Wraps a synchronous ORM call. Domain exceptions raised by the wrapped
    function pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.error(
                "Storage error in %s: %s",
                func.__qualname__,
                exc,
                extra={"operation": func.__name__, "error_type": type(exc).__name__},
                exc_info=True,
            )
            raise StorageFault(f"{func.__name__} failed: {exc}") from exc

    return wrapper
