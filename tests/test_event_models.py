"""Tests for employee event models."""
from datetime import datetime, timezone
import orjson
import pytest
from pydantic import ValidationError
from employee_events.event_models import (
    EmployeeEvent,
    EmployeeEventResponse,
    EmployeeMessage,
    EmployeeSnapshot,
    EventType,
    PersistentEmployeeEvent,
)


def test_message_parses_wire_format():
    """Test the queue message is read from camelCase JSON."""
    raw = {
        "eventType": "EMPLOYEE_UPDATED",
        "employee": {
            "id": "e-1",
            "emailAddress": "john@example.com",
            "fullName": {"firstName": "John", "lastName": "Smith"},
            "birthday": "1985-02-03",
            "department": {"id": 4, "departmentName": "Finance"},
            "version": 3,
        },
    }

    message = EmployeeMessage.model_validate(raw)

    assert message.event_type is EventType.EMPLOYEE_UPDATED
    assert message.employee.full_name.last_name == "Smith"
    assert message.employee.department_name == "Finance"
    assert message.employee.birthday == datetime(1985, 2, 3, tzinfo=timezone.utc)


def test_flat_department_name_folds_into_department():
    """Test a flat departmentName is read, and a nested department wins over it."""
    flat = EmployeeSnapshot.model_validate({"id": "e-1", "departmentName": "Sales"})
    both = EmployeeSnapshot.model_validate({
        "id": "e-2",
        "departmentName": "Sales",
        "department": {"id": 4, "departmentName": "Finance"},
    })

    assert flat.department_name == "Sales"
    assert flat.department.id is None
    assert both.department_name == "Finance"
    assert EmployeeSnapshot(id="e-3", department_name=None).department is None

def test_birthday_accepts_timestamps():
    """Test ISO timestamps are accepted for the birthday."""
    snapshot = EmployeeSnapshot(id="e-1", birthday="1985-02-03T00:00:00Z")
    assert snapshot.birthday.date().isoformat() == "1985-02-03"


def test_snapshot_serializes_birthday_as_date(snapshot_factory):
    """Test the birthday is written as yyyy-MM-dd."""
    snapshot = snapshot_factory(id="e-2")

    dumped = snapshot.model_dump(mode="json", by_alias=True)

    assert dumped["birthday"] == "1990-05-17"
    assert dumped["emailAddress"] == "jane.doe@example.com"
    assert dumped["department"]["departmentName"] == "Engineering"


def test_snapshot_is_immutable(snapshot_factory):
    """Test snapshots cannot be modified after construction."""
    snapshot = snapshot_factory()
    with pytest.raises(ValidationError):
        snapshot.email_address = "other@example.com"


def test_unknown_event_type_is_rejected():
    """Test event types outside the enumeration fail validation."""
    with pytest.raises(ValidationError):
        EmployeeMessage.model_validate({"eventType": "EMPLOYEE_PROMOTED", "employee": {"id": "e-1"}})


def test_invalid_birthday_is_rejected():
    """Test malformed dates fail validation."""
    with pytest.raises(ValidationError):
        EmployeeSnapshot(id="e-1", birthday="17.05.1990")


def test_persistent_event_from_domain_event(snapshot_factory):
    """Test the projection copies every snapshot field."""
    snapshot = snapshot_factory(id="e-3")

    record = PersistentEmployeeEvent.from_event(
        EmployeeEvent(employee=snapshot, event_type=EventType.EMPLOYEE_CREATED)
    )

    assert record.employee_id == "e-3"
    assert record.event_type is EventType.EMPLOYEE_CREATED
    assert record.email_address == "jane.doe@example.com"
    assert record.first_name == "Jane"
    assert record.last_name == "Doe"
    assert record.department_name == "Engineering"
    assert record.birthday == datetime(1990, 5, 17, tzinfo=timezone.utc)
    assert record.id is None
    assert record.created_at is None


def test_persistent_event_without_full_name(snapshot_factory):
    """Test a missing name leaves the name fields empty instead of failing."""
    snapshot = snapshot_factory(full_name=None, department=None)

    record = PersistentEmployeeEvent.from_event(
        EmployeeEvent(employee=snapshot, event_type=EventType.EMPLOYEE_DELETED)
    )

    assert record.first_name is None
    assert record.last_name is None
    assert record.department_name is None


def test_response_json_shape(snapshot_factory):
    """Test the API representation uses camelCase and a plain date birthday."""
    record = PersistentEmployeeEvent.from_event(
        EmployeeEvent(employee=snapshot_factory(id="e-4"), event_type=EventType.EMPLOYEE_CREATED)
    ).model_copy(update={"id": "rec-1", "created_at": datetime(2024, 4, 5, 10, 15, 30, tzinfo=timezone.utc)})

    body = orjson.loads(orjson.dumps(EmployeeEventResponse.from_persistent(record).model_dump(mode="json", by_alias=True)))

    assert set(body) == {
        "eventType", "employeeId", "emailAddress", "firstName",
        "lastName", "birthday", "departmentName", "createdAt",
    }
    assert body["birthday"] == "1990-05-17"
    assert body["eventType"] == "EMPLOYEE_CREATED"
    assert body["createdAt"].startswith("2024-04-05T10:15:30")
