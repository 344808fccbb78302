"""Helpers around the ledger store (the Django ORM)."""

import functools
import typing as t

import structlog
from django.db import InterfaceError, OperationalError

from .exceptions import StoreUnavailableError

logger = structlog.get_logger(__name__)

P = t.ParamSpec("P")
R = t.TypeVar("R")


def translate_store_errors(func: t.Callable[P, R]) -> t.Callable[P, R]:
    """Report connectivity failures as ``StoreUnavailableError``.

    Integrity violations are not connectivity failures and propagate untouched.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.warning("store_unavailable", operation=func.__qualname__, error=str(exc))
            raise StoreUnavailableError() from exc

    return wrapper
