"""Shared test factories."""
import uuid
import pytest
from employee_events.config import Settings
from employee_events.event_models import Department, EmployeeSnapshot, FullName


def build_snapshot(**overrides) -> EmployeeSnapshot:
    """Employee snapshot with realistic defaults."""
    values = {
        "id": str(uuid.uuid4()),
        "email_address": "jane.doe@example.com",
        "full_name": FullName(first_name="Jane", last_name="Doe"),
        "birthday": "1990-05-17",
        "department": Department(id=7, department_name="Engineering"),
    }
    values.update(overrides)
    return EmployeeSnapshot(**values)


@pytest.fixture
def snapshot_factory():
    return build_snapshot


@pytest.fixture
def settings():
    return Settings(LOG_JSON=False, TRANSPORT_ADAPTER="memory", STORE_ADAPTER="memory")
