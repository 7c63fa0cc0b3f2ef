"""Redis Streams message transport."""
import asyncio
import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError, ResponseError
from .base import MessageTransport, MessageHandler

log = structlog.get_logger()

DATA_FIELD = b"data"


class RedisStreamTransport(MessageTransport):
    """Redis Streams implementation of the message transport.

    Messages are appended to a stream and consumed through a consumer group,
    so several consumer tasks (or processes) share the load. Each entry is
    acknowledged once its handler returns, whether handling succeeded or not:
    a message is never redelivered.
    """

    def __init__(
        self,
        redis_url: str,
        stream_key: str = "employee-events",
        group: str = "event-service",
        consumer_name: str = "consumer",
        maxlen: int = 10000,
        block_ms: int = 5000,
        batch_size: int = 10,
        error_pause: float = 1.0,
    ):
        """
        Initialize Redis stream transport.

        Args:
            redis_url: Redis connection URL
            stream_key: Stream carrying the messages
            group: Consumer group shared by all consumers of this service
            consumer_name: Prefix for this process' consumer names
            maxlen: Approximate maximum stream length kept by XADD
            block_ms: How long one XREADGROUP call waits for new entries
            batch_size: Maximum entries fetched per XREADGROUP call
            error_pause: Seconds to wait after a failed read before reading again
        """
        self.redis_url = redis_url
        self.stream_key = stream_key
        self.group = group
        self.consumer_name = consumer_name
        self.maxlen = maxlen
        self.block_ms = block_ms
        self.batch_size = batch_size
        self.error_pause = error_pause
        self._client: Redis | None = None
        self._tasks: list[asyncio.Task] = []

    def _get_client(self) -> Redis:
        """Get or create Redis client."""
        if self._client is None:
            self._client = Redis.from_url(
                self.redis_url,
                decode_responses=False,
                socket_connect_timeout=5,
            )
        return self._client

    async def publish(self, body: bytes) -> None:
        """
        Append a message to the stream.

        Raises:
            RedisError: If unable to publish to Redis
        """
        try:
            client = self._get_client()
            entry_id = await client.xadd(
                self.stream_key,
                {DATA_FIELD: body},
                id="*",
                maxlen=self.maxlen,
                approximate=True,
            )
            log.debug("message.enqueued", entry_id=entry_id, stream=self.stream_key, transport="redis_stream")
        except RedisError as e:
            log.error("redis.publish_failed", error=str(e), stream=self.stream_key)
            raise

    async def ensure_group(self) -> None:
        """Create the consumer group (and the stream) unless it already exists."""
        client = self._get_client()
        try:
            await client.xgroup_create(self.stream_key, self.group, id="0", mkstream=True)
            log.info("redis.group_created", stream=self.stream_key, group=self.group)
        except ResponseError as e:
            if "BUSYGROUP" not in str(e):
                raise

    async def start(self, handler: MessageHandler, consumers: int = 1) -> None:
        """Create the consumer group and spawn consumer tasks."""
        await self.ensure_group()
        for index in range(consumers):
            name = f"{self.consumer_name}-{index}"
            task = asyncio.create_task(self._consume(handler, name), name=f"redis-consumer-{index}")
            self._tasks.append(task)
        log.info(
            "transport.started",
            transport="redis_stream",
            stream=self.stream_key,
            group=self.group,
            consumers=consumers,
        )

    async def _consume(self, handler: MessageHandler, consumer: str) -> None:
        while True:
            try:
                await self.read_batch(handler, consumer)
            except asyncio.CancelledError:
                raise
            except RedisError as e:
                log.error("redis.consume_failed", error=str(e), consumer=consumer)
                await asyncio.sleep(self.error_pause)

    async def read_batch(self, handler: MessageHandler, consumer: str) -> int:
        """
        Read and handle one batch of new entries.

        Args:
            handler: Coroutine receiving each raw message body
            consumer: Consumer name within the group

        Returns:
            Number of entries handled
        """
        client = self._get_client()
        response = await client.xreadgroup(
            self.group,
            consumer,
            {self.stream_key: ">"},
            count=self.batch_size,
            block=self.block_ms,
        )

        handled = 0
        for _stream, entries in response or []:
            for entry_id, fields in entries:
                try:
                    await handler(fields.get(DATA_FIELD, b""))
                except Exception as e:
                    log.error("message.handler_failed", error=str(e), entry_id=entry_id, exc_info=True)
                finally:
                    await self._ack(client, entry_id)
                handled += 1
        return handled

    async def _ack(self, client: Redis, entry_id: bytes) -> None:
        """Acknowledge one entry; a failed ack is logged so the rest of the batch still runs."""
        try:
            await client.xack(self.stream_key, self.group, entry_id)
        except RedisError as e:
            log.error("redis.ack_failed", error=str(e), entry_id=entry_id, stream=self.stream_key)

    async def stop(self) -> None:
        """Cancel consumer tasks and close the Redis connection."""
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        log.info("transport.stopped", transport="redis_stream")

    async def health_check(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if Redis is accessible, False otherwise
        """
        try:
            client = self._get_client()
            return bool(await client.ping())
        except Exception as e:
            log.warning("redis.health_check_failed", error=str(e))
            return False
