"""Employee event models shared by the publisher, receiver, projector and API."""
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

DATE_FORMAT = "%Y-%m-%d"


class EventType(str, Enum):
    """Lifecycle transitions of an employee record."""
    EMPLOYEE_CREATED = "EMPLOYEE_CREATED"
    EMPLOYEE_UPDATED = "EMPLOYEE_UPDATED"
    EMPLOYEE_DELETED = "EMPLOYEE_DELETED"


class WireModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def parse_birthday(value: Any) -> Any:
    """Bare ``yyyy-MM-dd`` dates become midnight UTC; anything else is left to pydantic."""
    if isinstance(value, str) and len(value) == 10:
        return datetime.combine(datetime.strptime(value, DATE_FORMAT).date(), time.min, tzinfo=timezone.utc)
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


class FullName(WireModel):
    first_name: str | None = None
    last_name: str | None = None


class Department(WireModel):
    id: int | None = None
    department_name: str | None = None


class EmployeeSnapshot(WireModel):
    """Immutable copy of an employee taken when a lifecycle event fired."""
    model_config = ConfigDict(frozen=True)

    id: str
    email_address: str | None = None
    full_name: FullName | None = Field(default_factory=FullName)
    birthday: datetime | None = None
    department: Department | None = None

    @model_validator(mode="before")
    @classmethod
    def fold_department_name(cls, data: Any) -> Any:
        """Accept a flat ``departmentName`` as well as the nested ``department`` object."""
        if not isinstance(data, dict):
            return data
        flat_keys = [key for key in ("departmentName", "department_name") if key in data]
        if not flat_keys:
            return data
        data = dict(data)
        name = data.pop(flat_keys[0])
        for key in flat_keys[1:]:
            data.pop(key)
        if data.get("department") is None and name is not None:
            data["department"] = {"departmentName": name}
        return data

    @field_validator("birthday", mode="before")
    @classmethod
    def normalize_birthday(cls, value: Any) -> Any:
        return parse_birthday(value)

    @field_serializer("birthday")
    def serialize_birthday(self, value: datetime | None) -> str | None:
        return value.date().isoformat() if value is not None else None

    @property
    def department_name(self) -> str | None:
        return self.department.department_name if self.department is not None else None


class EmployeeMessage(WireModel):
    """Body of a message on the employee queue."""
    event_type: EventType
    employee: EmployeeSnapshot


class EmployeeEvent(BaseModel):
    """In-process domain event raised for every received employee message."""
    model_config = ConfigDict(frozen=True)

    employee: EmployeeSnapshot
    event_type: EventType


class PersistentEmployeeEvent(WireModel):
    """Durable, denormalized record of one employee event."""
    id: str | None = None
    event_type: EventType
    employee_id: str
    email_address: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    birthday: datetime | None = None
    department_name: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_event(cls, event: EmployeeEvent) -> "PersistentEmployeeEvent":
        employee = event.employee
        full_name = employee.full_name
        return cls(
            event_type=event.event_type,
            employee_id=employee.id,
            email_address=employee.email_address,
            first_name=full_name.first_name if full_name is not None else None,
            last_name=full_name.last_name if full_name is not None else None,
            birthday=employee.birthday,
            department_name=employee.department_name,
        )


class EmployeeEventResponse(WireModel):
    """Event representation returned by the query API."""
    event_type: EventType
    employee_id: str
    email_address: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    birthday: datetime | None = None
    department_name: str | None = None
    created_at: datetime | None = None

    @field_validator("birthday", mode="before")
    @classmethod
    def normalize_birthday(cls, value: Any) -> Any:
        return parse_birthday(value)

    @field_serializer("birthday")
    def serialize_birthday(self, value: datetime | None) -> str | None:
        return value.date().isoformat() if value is not None else None

    @classmethod
    def from_persistent(cls, event: PersistentEmployeeEvent) -> "EmployeeEventResponse":
        return cls(**event.model_dump(exclude={"id"}))
