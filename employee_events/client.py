"""HTTP client for the employee event query API."""
from urllib.parse import quote

import httpx
import structlog
from .event_models import EmployeeEventResponse
from .pagination import Page, decode_page

log = structlog.get_logger()

EVENTS_PATH = "/api/v1/events/{employee_id}"


class EmployeeEventClient:
    """
    Reads employee event pages from a running event service.

    Pages are rebuilt with ``decode_page``, so the client only depends on the
    wire format, never on the server's page implementation.
    """

    def __init__(self, base_url: str = "http://localhost:8080", http_client: httpx.AsyncClient | None = None, timeout: float = 10.0):
        """
        Initialize the client.

        Args:
            base_url: Root URL of the event service
            http_client: Preconfigured client (its own base_url is used when given)
            timeout: Request timeout in seconds for the client created here
        """
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def find_by_employee_id(
        self, employee_id: str, page: int = 0, size: int | None = None
    ) -> Page[EmployeeEventResponse]:
        """
        Fetch one page of an employee's events.

        Raises:
            httpx.HTTPStatusError: If the service answers with an error status
            PageTypeMismatchError: If the body is not a page object
        """
        params = {"page": page}
        if size is not None:
            params["size"] = size
        response = await self._http.get(EVENTS_PATH.format(employee_id=quote(employee_id, safe="")), params=params)
        response.raise_for_status()
        events = decode_page(response.content, EmployeeEventResponse.model_validate)
        log.debug("employee_events.fetched", employee_id=employee_id, count=events.number_of_elements)
        return events

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "EmployeeEventClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
