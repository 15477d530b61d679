import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Generic, Protocol, TypeVar

from httpx import Response

T = TypeVar("T")
logger = logging.getLogger(__name__)

# enqueued by the producer side once, after the last page
_CLOSED = object()


class Pager(Protocol):
    """Decides whether and where to fetch the next page of a listing."""

    def next_page_url(self, response: Response) -> str | None: ...


class LinkHeaderPager:
    """
    Follows the RFC 8288 `Link` header of each page, e.g.
    `<https://api.newrelic.com/v2/alerts_channels.json?page=2>; rel="next"`.
    """

    rel: str = "next"

    def next_page_url(self, response: Response) -> str | None:
        link = response.links.get(self.rel)
        if not link:
            return None
        return link.get("url") or None


class PageAggregator(Generic[T]):
    """
    Merges the pages pushed by a producer into one collection.

    The producer coroutine function receives the handoff queue and awaits `put()`
    for every page it fetches. A single consumer task drains the queue, converting
    each page with `to_page` and appending its items in arrival order. `collect()`
    returns once the producer has finished and the consumer has processed
    everything queued before the queue was closed.

    If either side fails, the other one is cancelled, the partial collection is
    discarded and the failing side's exception is raised unchanged.
    """

    def __init__(self, to_page: Callable[[Any], Iterable[T]], buffer_size: int = 1):
        if buffer_size < 1:
            # asyncio.Queue treats a maxsize of 0 as unbounded
            raise ValueError("buffer_size must be at least 1")
        self.to_page = to_page
        self.buffer_size = buffer_size

    async def collect(self, produce: Callable[[asyncio.Queue], Awaitable[Any]]) -> list[T]:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.buffer_size)
        collection: list[T] = []

        # the consumer is scheduled first so it is waiting before the first page arrives
        consumer = asyncio.create_task(self._consume(queue, collection))
        producer = asyncio.create_task(self._produce(produce, queue))
        try:
            await asyncio.wait({producer, consumer}, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in (producer, consumer):
                if not task.done():
                    task.cancel()
            await asyncio.gather(producer, consumer, return_exceptions=True)

        # a producer failure wins over a consumer cancelled because of it
        for task in (producer, consumer):
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()  # type: ignore[misc]

        return collection

    @staticmethod
    async def _produce(produce: Callable[[asyncio.Queue], Awaitable[Any]], queue: asyncio.Queue) -> None:
        await produce(queue)
        await queue.put(_CLOSED)

    async def _consume(self, queue: asyncio.Queue, collection: list[T]) -> None:
        pages = 0
        while True:
            page = await queue.get()
            if page is _CLOSED:
                break
            collection.extend(self.to_page(page))
            pages += 1
        logger.debug("Merged %d items from %d pages", len(collection), pages)
