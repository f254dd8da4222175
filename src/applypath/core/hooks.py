"""Write-path hooks that keep derived columns consistent."""

import functools
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, ParamSpec, TypeVar

from src.applypath.models.base import utc_now

P = ParamSpec("P")
R = TypeVar("R")


def stamp_updated_at(entity: Any, now: datetime | None = None) -> datetime:
    """Set `entity.updated_at` to the current time.

    Overrides any caller-supplied value and never moves the timestamp
    backwards, so successive writes to one row are non-decreasing even if
    the clock steps back.
    """
    stamp = now or utc_now()
    previous = getattr(entity, "updated_at", None)
    if previous is not None and previous > stamp:
        stamp = previous
    entity.updated_at = stamp
    return stamp


def touches_updated_at(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Decorate a repository write so its entity is stamped before the write runs.

    The wrapped coroutine must take the entity as its first argument after `self`.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        stamp_updated_at(args[1])
        return await func(*args, **kwargs)

    return wrapper
