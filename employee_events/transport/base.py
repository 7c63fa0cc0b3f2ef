"""Base interface for message transport backends."""
from abc import ABC, abstractmethod
from typing import Awaitable, Callable

MessageHandler = Callable[[bytes], Awaitable[None]]


class MessageTransport(ABC):
    """Abstract interface for the queue carrying employee messages."""

    @abstractmethod
    async def publish(self, body: bytes) -> None:
        """
        Enqueue one message.

        Args:
            body: Serialized message body
        """
        pass

    @abstractmethod
    async def start(self, handler: MessageHandler, consumers: int = 1) -> None:
        """
        Start consuming messages.

        Every message is handed to ``handler`` exactly once and is considered
        consumed when the handler returns or raises.

        Args:
            handler: Coroutine receiving the raw message body
            consumers: Number of concurrent consumer tasks
        """
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Stop all consumer tasks and release connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the transport is healthy and reachable.

        Returns:
            True if transport is healthy, False otherwise
        """
        pass
