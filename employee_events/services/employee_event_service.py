"""Projection of employee events into the store, and paginated retrieval."""
import structlog
from ..event_models import EmployeeEvent, PersistentEmployeeEvent
from ..metrics import Metrics
from ..pagination import Page, PageRequest
from ..store.base import EmployeeEventStore
from .event_bus import LocalEventBus

log = structlog.get_logger()

MAX_PAGE_SIZE = 200


class EmployeeEventService:
    """
    Writes one persisted record per domain event and serves an employee's
    event history ordered by creation time.
    """

    def __init__(
        self,
        store: EmployeeEventStore,
        metrics: Metrics | None = None,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        self._store = store
        self._metrics = metrics
        self.max_page_size = min(max_page_size, MAX_PAGE_SIZE)

    def register(self, event_bus: LocalEventBus) -> None:
        """Subscribe the projector to employee domain events."""
        event_bus.subscribe(EmployeeEvent, self.handle_employee_event)

    async def handle_employee_event(self, event: EmployeeEvent) -> PersistentEmployeeEvent:
        """
        Map the event onto a new record and insert it.

        Store failures propagate to the caller.
        """
        stored = await self._store.insert(PersistentEmployeeEvent.from_event(event))
        log.info(
            "employee_event.persisted",
            id=stored.id,
            employee_id=stored.employee_id,
            event_type=stored.event_type.value,
        )
        if self._metrics is not None:
            self._metrics.record_persisted(stored.event_type.value)
        return stored

    async def find_by_employee_id(
        self, employee_id: str, requested: PageRequest
    ) -> Page[PersistentEmployeeEvent]:
        """
        Page through an employee's events, oldest first.

        The requested sort is ignored and the page size is capped at
        ``max_page_size``. Unknown employees yield an empty page.
        """
        if employee_id is None:
            raise ValueError("employee_id must not be None")

        request = PageRequest(number=requested.number, size=min(requested.size, self.max_page_size))
        log.info(
            "employee_events.query",
            employee_id=employee_id,
            page=request.number,
            size=request.size,
            requested_size=requested.size,
        )
        return await self._store.find_by_employee_id(employee_id, request)
