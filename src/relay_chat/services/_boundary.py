from __future__ import annotations

import functools
import logging
from typing import Awaitable, Callable, ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from relay_chat.application.exceptions import PersistenceError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def persistence_boundary(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Turn driver failures into PersistenceError; domain errors pass through."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("Persistence failure in %s", func.__qualname__)
            raise PersistenceError("Storage operation failed") from exc

    return wrapper
