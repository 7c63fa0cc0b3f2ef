"""Transport selection from settings."""
import socket
import structlog
from .base import MessageTransport
from .memory import InMemoryTransport
from .redis_stream import RedisStreamTransport
from ..config import Settings

log = structlog.get_logger()


def create_transport(settings: Settings) -> MessageTransport:
    """
    Create the transport selected by TRANSPORT_ADAPTER.

    Returns:
        MessageTransport instance; falls back to memory when Redis is not configured
    """
    if settings.TRANSPORT_ADAPTER == "redis":
        if not settings.REDIS_URL:
            log.warning(
                "transport.fallback",
                requested="redis",
                actual="memory",
                reason="REDIS_URL not configured"
            )
            return InMemoryTransport()

        log.info("transport.selected", type="redis", stream=settings.QUEUE_NAME)
        return RedisStreamTransport(
            redis_url=str(settings.REDIS_URL),
            stream_key=settings.QUEUE_NAME,
            group=settings.CONSUMER_GROUP,
            consumer_name=f"{settings.SERVICE_NAME}-{socket.gethostname()}",
            maxlen=settings.STREAM_MAXLEN,
        )

    log.info("transport.selected", type="memory")
    return InMemoryTransport()
