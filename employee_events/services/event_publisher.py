"""Publishes employee lifecycle messages to the transport."""
import orjson
import structlog
from ..event_models import EmployeeMessage, EmployeeSnapshot, EventType
from ..transport.base import MessageTransport

log = structlog.get_logger()


class EmployeeEventPublisher:
    """Sends one message per employee create, update or delete."""

    def __init__(self, transport: MessageTransport):
        self._transport = transport

    async def publish(self, event_type: EventType, employee: EmployeeSnapshot) -> None:
        """
        Serialize and enqueue an employee message.

        Args:
            event_type: Kind of lifecycle change
            employee: Snapshot of the employee after (or, for deletes, before) the change

        Raises:
            Whatever the transport raises when the broker is unreachable
        """
        message = EmployeeMessage(event_type=event_type, employee=employee)
        body = orjson.dumps(message.model_dump(mode="json", by_alias=True))
        await self._transport.publish(body)
        log.info("employee_message.published", event_type=event_type.value, employee_id=employee.id)

    async def employee_created(self, employee: EmployeeSnapshot) -> None:
        await self.publish(EventType.EMPLOYEE_CREATED, employee)

    async def employee_updated(self, employee: EmployeeSnapshot) -> None:
        await self.publish(EventType.EMPLOYEE_UPDATED, employee)

    async def employee_deleted(self, employee: EmployeeSnapshot) -> None:
        await self.publish(EventType.EMPLOYEE_DELETED, employee)
