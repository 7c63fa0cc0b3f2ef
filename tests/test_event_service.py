"""Tests for the employee event query service."""
import pytest
from unittest.mock import AsyncMock
from pydantic import ValidationError
from employee_events.config import Settings
from employee_events.event_models import EmployeeEvent, EventType
from employee_events.pagination import Direction, PageRequest, SortOrder
from employee_events.services.employee_event_service import EmployeeEventService, MAX_PAGE_SIZE
from employee_events.store.memory import InMemoryEventStore


async def _seed(service: EmployeeEventService, snapshot, count: int):
    kinds = [EventType.EMPLOYEE_CREATED, EventType.EMPLOYEE_UPDATED, EventType.EMPLOYEE_DELETED]
    for i in range(count):
        await service.handle_employee_event(EmployeeEvent(employee=snapshot, event_type=kinds[i % 3]))


@pytest.mark.asyncio
async def test_page_size_is_clamped(snapshot_factory):
    """Test no page holds more than the maximum even for huge requests."""
    service = EmployeeEventService(InMemoryEventStore())
    snapshot = snapshot_factory(id="e-1")
    await _seed(service, snapshot, MAX_PAGE_SIZE + 50)

    page = await service.find_by_employee_id("e-1", PageRequest(number=0, size=10000))

    assert page.number_of_elements == MAX_PAGE_SIZE
    assert page.size == MAX_PAGE_SIZE
    assert page.total_elements == MAX_PAGE_SIZE + 50


@pytest.mark.asyncio
async def test_small_page_size_is_kept(snapshot_factory):
    """Test sizes under the maximum pass through with the page number."""
    service = EmployeeEventService(InMemoryEventStore())
    await _seed(service, snapshot_factory(id="e-1"), 7)

    page = await service.find_by_employee_id("e-1", PageRequest(number=1, size=3))

    assert page.number == 1
    assert page.size == 3
    assert page.number_of_elements == 3
    assert page.total_pages == 3


@pytest.mark.asyncio
async def test_results_ordered_by_created_at_regardless_of_sort(snapshot_factory):
    """Test pages are ascending by createdAt even when descending order is requested."""
    service = EmployeeEventService(InMemoryEventStore())
    await _seed(service, snapshot_factory(id="e-1"), 12)
    requested = PageRequest(
        number=0,
        size=12,
        sort=(SortOrder(property="createdAt", direction=Direction.DESC),),
    )

    page = await service.find_by_employee_id("e-1", requested)

    created = [e.created_at for e in page.content]
    assert created == sorted(created)
    assert [e.event_type for e in page.content[:3]] == [
        EventType.EMPLOYEE_CREATED, EventType.EMPLOYEE_UPDATED, EventType.EMPLOYEE_DELETED,
    ]
    assert page.sort == (SortOrder(property="createdAt", direction=Direction.ASC),)


@pytest.mark.asyncio
async def test_unknown_employee_yields_empty_page():
    """Test querying an employee without events is not an error."""
    service = EmployeeEventService(InMemoryEventStore())

    page = await service.find_by_employee_id("nobody", PageRequest())

    assert page.content == []
    assert page.total_elements == 0


@pytest.mark.asyncio
async def test_query_passes_clamped_request_to_store():
    """Test the store sees the clamped size and no caller sort."""
    store = AsyncMock()
    service = EmployeeEventService(store, max_page_size=20)

    await service.find_by_employee_id(
        "e-1",
        PageRequest(number=4, size=500, sort=(SortOrder(property="lastName"),)),
    )

    employee_id, request = store.find_by_employee_id.call_args[0]
    assert employee_id == "e-1"
    assert request == PageRequest(number=4, size=20)


@pytest.mark.asyncio
async def test_none_employee_id_is_rejected():
    """Test a missing employee id is a caller error."""
    service = EmployeeEventService(InMemoryEventStore())
    with pytest.raises(ValueError):
        await service.find_by_employee_id(None, PageRequest())


@pytest.mark.asyncio
async def test_projection_failure_propagates(snapshot_factory):
    """Test store errors surface from the projector."""
    store = AsyncMock()
    store.insert.side_effect = RuntimeError("store unavailable")
    service = EmployeeEventService(store)

    with pytest.raises(RuntimeError):
        await service.handle_employee_event(
            EmployeeEvent(employee=snapshot_factory(), event_type=EventType.EMPLOYEE_CREATED)
        )


def test_max_page_size_setting_cannot_exceed_limit():
    """Test configuration rejects a maximum page size above 200."""
    with pytest.raises(ValidationError):
        Settings(MAX_PAGE_SIZE=1000)
    with pytest.raises(ValidationError):
        Settings(DEFAULT_PAGE_SIZE=500)
    assert Settings(MAX_PAGE_SIZE=200).MAX_PAGE_SIZE == 200


@pytest.mark.asyncio
async def test_service_never_serves_more_than_limit(snapshot_factory):
    """Test a larger configured maximum is still capped at 200 items per page."""
    service = EmployeeEventService(InMemoryEventStore(), max_page_size=1000)
    await _seed(service, snapshot_factory(id="e-2"), 300)

    page = await service.find_by_employee_id("e-2", PageRequest(number=0, size=10000))

    assert service.max_page_size == MAX_PAGE_SIZE
    assert page.number_of_elements == MAX_PAGE_SIZE
    assert page.size == MAX_PAGE_SIZE
