"""Consumes employee messages and raises them as in-process domain events."""
import orjson
import structlog
from ..event_models import EmployeeEvent, EmployeeMessage
from ..metrics import Metrics
from .event_bus import LocalEventBus

log = structlog.get_logger()


class EmployeeMessageReceiver:
    """
    Entry point for every message taken off the employee queue.

    ``on_message`` never raises. Malformed messages and failures of the
    downstream handlers are logged and the message counts as consumed; nothing
    is retried or dead-lettered.
    """

    def __init__(self, event_bus: LocalEventBus, metrics: Metrics | None = None):
        self._event_bus = event_bus
        self._metrics = metrics

    async def on_message(self, raw: bytes) -> None:
        try:
            message = EmployeeMessage.model_validate(orjson.loads(raw))
        except Exception as e:
            self._drop(raw, e, reason="malformed")
            return

        log.info(
            "employee_message.received",
            event_type=message.event_type.value,
            employee_id=message.employee.id,
        )
        if self._metrics is not None:
            self._metrics.record_received(message.event_type.value)

        try:
            await self._event_bus.publish(EmployeeEvent(employee=message.employee, event_type=message.event_type))
        except Exception as e:
            self._drop(raw, e, reason="handler_failed")

    def _drop(self, raw: bytes, error: Exception, reason: str) -> None:
        log.error(
            "employee_message.dropped",
            reason=reason,
            payload=raw.decode("utf-8", errors="replace") if isinstance(raw, (bytes, bytearray)) else repr(raw),
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
        )
        if self._metrics is not None:
            self._metrics.record_dropped(reason)
