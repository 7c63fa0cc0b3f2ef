"""In-memory employee event store."""
import uuid
from datetime import datetime, timezone
import structlog
from .base import CREATED_AT_ASC, EmployeeEventStore
from ..event_models import PersistentEmployeeEvent
from ..pagination import Page, PageRequest

log = structlog.get_logger()


class InMemoryEventStore(EmployeeEventStore):
    """List-backed store, used for development and tests."""

    def __init__(self):
        self._events: list[PersistentEmployeeEvent] = []

    async def insert(self, event: PersistentEmployeeEvent) -> PersistentEmployeeEvent:
        stored = event.model_copy(
            update={"id": uuid.uuid4().hex, "created_at": datetime.now(timezone.utc)}
        )
        self._events.append(stored)
        log.debug("store.inserted", id=stored.id, employee_id=stored.employee_id, store="memory")
        return stored

    async def find_by_employee_id(
        self, employee_id: str, request: PageRequest
    ) -> Page[PersistentEmployeeEvent]:
        matching = sorted(
            (e for e in self._events if e.employee_id == employee_id),
            key=lambda e: e.created_at,
        )
        content = matching[request.offset:request.offset + request.size]
        return Page.of(content, request.model_copy(update={"sort": CREATED_AT_ASC}), len(matching))

    async def delete_all(self) -> int:
        removed = len(self._events)
        self._events.clear()
        return removed

    async def health_check(self) -> bool:
        """In-memory store is always healthy."""
        return True
