"""In-memory message transport."""
import asyncio
import structlog
from .base import MessageTransport, MessageHandler

log = structlog.get_logger()


class InMemoryTransport(MessageTransport):
    """In-process queue, used for development and tests."""

    def __init__(self):
        self._queue: asyncio.Queue[bytes] = asyncio.Queue()
        self._tasks: list[asyncio.Task] = []

    async def publish(self, body: bytes) -> None:
        """Put the message on the in-memory queue."""
        await self._queue.put(body)
        log.debug("message.enqueued", size=len(body), transport="memory")

    async def start(self, handler: MessageHandler, consumers: int = 1) -> None:
        """Spawn ``consumers`` tasks draining the queue."""
        for index in range(consumers):
            task = asyncio.create_task(self._consume(handler), name=f"memory-consumer-{index}")
            self._tasks.append(task)
        log.info("transport.started", transport="memory", consumers=consumers)

    async def _consume(self, handler: MessageHandler) -> None:
        while True:
            body = await self._queue.get()
            try:
                await handler(body)
            except Exception as e:
                # The message is consumed either way
                log.error("message.handler_failed", error=str(e), transport="memory", exc_info=True)
            finally:
                self._queue.task_done()

    async def join(self) -> None:
        """Wait until every enqueued message has been handled."""
        await self._queue.join()

    async def stop(self) -> None:
        """Cancel consumer tasks."""
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
        log.info("transport.stopped", transport="memory")

    async def health_check(self) -> bool:
        """In-memory transport is always healthy."""
        return True
