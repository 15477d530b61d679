import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

AsyncFn = TypeVar("AsyncFn", bound=Callable[..., Awaitable[Any]])
logger = logging.getLogger(__name__)


def retry(
    retries: int = 3, delay: float = 1.0, exceptions: tuple[type[Exception], ...] = (Exception,)
) -> Callable[[AsyncFn], AsyncFn]:
    """
    Runs a coroutine function up to `retries` times, the first call included.

    Only errors listed in `exceptions` lead to another attempt, `delay` seconds later.
    Anything else, or the error of the last attempt, reaches the caller as raised.
    No sleep happens after the last attempt.
    """
    if retries < 1:
        raise ValueError("retries must be at least 1")

    def decorator(func: AsyncFn) -> AsyncFn:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 1
            while True:
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= retries:
                        raise
                    logger.warning(
                        "%s failed (%s), attempt %d of %d, next try in %.1fs",
                        getattr(func, "__qualname__", repr(func)),
                        e,
                        attempt,
                        retries,
                        delay,
                    )
                attempt += 1
                await asyncio.sleep(delay)

        return wrapper  # type: ignore

    return decorator
