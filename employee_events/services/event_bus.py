"""In-process event bus with explicit, typed subscriptions."""
from collections import defaultdict
from typing import Any, Awaitable, Callable, TypeVar
import structlog

log = structlog.get_logger()

E = TypeVar("E")
EventHandler = Callable[[Any], Awaitable[None]]


class LocalEventBus:
    """
    Dispatches domain events to the handlers subscribed for their class.

    Handlers run one after another in the publisher's task. A failing handler
    stops dispatch and its exception propagates to the caller of ``publish``.
    """

    def __init__(self):
        self._handlers: dict[type, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_class: type[E], handler: Callable[[E], Awaitable[None]]) -> None:
        """
        Register a handler for one event class.

        Args:
            event_class: Exact class of the events to receive
            handler: Coroutine function called with each event
        """
        self._handlers[event_class].append(handler)
        log.debug("event_bus.subscribed", event_class=event_class.__name__, handler=getattr(handler, "__qualname__", repr(handler)))

    async def publish(self, event: Any) -> None:
        """Deliver ``event`` to every handler subscribed for its class."""
        handlers = self._handlers.get(type(event), [])
        if not handlers:
            log.warning("event_bus.no_handlers", event_class=type(event).__name__)
            return
        for handler in handlers:
            await handler(event)
