from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from ..event_models import EmployeeEventResponse
from ..pagination import PageRequest, dumps_page
from ..services.employee_event_service import EmployeeEventService

router = APIRouter(prefix="/api/v1", tags=["employee-events"])


def get_event_service(request: Request) -> EmployeeEventService:
    return request.app.state.event_service


def get_default_page_size(request: Request) -> int:
    return request.app.state.settings.DEFAULT_PAGE_SIZE


@router.get("/events/{employee_id}")
async def find_events_by_employee_id(
    employee_id: str,
    page: int = 0,
    size: int | None = None,
    sort: list[str] | None = Query(default=None, description="Accepted for compatibility; events are always ordered by createdAt ascending"),
    service: EmployeeEventService = Depends(get_event_service),
    default_size: int = Depends(get_default_page_size),
):
    """
    Page through the events of one employee, oldest first.

    Negative page numbers are read as 0 and missing or non-positive sizes fall
    back to the default page size; sizes above the maximum are capped.
    """
    request = PageRequest(
        number=max(page, 0),
        size=size if size is not None and size > 0 else default_size,
    )
    events = await service.find_by_employee_id(employee_id, request)
    return Response(
        content=dumps_page(events.map(EmployeeEventResponse.from_persistent)),
        media_type="application/json",
    )
