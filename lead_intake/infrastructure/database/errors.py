"""Translation of driver/ORM failures into the domain's store error."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from lead_intake.domain.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def translate_store_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Wrap a repository coroutine so persistence failures surface as
    ``StoreUnavailableError``. The full error is logged here, once.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except (SQLAlchemyError, OSError) as exc:
                logger.exception("Store failure during %s", operation)
                raise StoreUnavailableError(operation, exc) from exc

        return wrapper

    return decorator
