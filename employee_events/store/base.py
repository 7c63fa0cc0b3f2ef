"""Base interface for employee event stores."""
from abc import ABC, abstractmethod
from ..event_models import PersistentEmployeeEvent
from ..pagination import Direction, Page, PageRequest, SortOrder

# The only order events are ever returned in
CREATED_AT_ASC = (SortOrder(property="createdAt", direction=Direction.ASC),)


class EmployeeEventStore(ABC):
    """Insert-only document store for persisted employee events."""

    @abstractmethod
    async def insert(self, event: PersistentEmployeeEvent) -> PersistentEmployeeEvent:
        """
        Store a new event.

        The store assigns the record id and the creation timestamp.

        Args:
            event: Event to store; ``id`` and ``created_at`` are ignored

        Returns:
            The stored event with ``id`` and ``created_at`` set
        """
        pass

    @abstractmethod
    async def find_by_employee_id(
        self, employee_id: str, request: PageRequest
    ) -> Page[PersistentEmployeeEvent]:
        """
        Page through the events of one employee, oldest first.

        Args:
            employee_id: Exact employee identifier to match
            request: Page number and size; any sort in the request is ignored

        Returns:
            Page of events ordered by ``created_at`` ascending
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """
        Remove every stored event (test and cleanup tooling only).

        Returns:
            Number of removed events
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the store is reachable.

        Returns:
            True if store is healthy, False otherwise
        """
        pass
