"""MongoDB employee event store."""
from datetime import datetime, timezone
from typing import Any

import structlog
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING

from .base import CREATED_AT_ASC, EmployeeEventStore
from ..event_models import PersistentEmployeeEvent
from ..pagination import Page, PageRequest

log = structlog.get_logger()


class MongoEventStore(EmployeeEventStore):
    """Employee events kept in a MongoDB collection.

    Documents use camelCase field names. MongoDB generates ``_id``;
    ``createdAt`` is stamped when the document is written. Equal
    ``createdAt`` values (millisecond precision) are ordered by ``_id``. Call
    :meth:`create_indexes` once on startup.
    """

    INDEX_NAME = "idx_employee_created_at_id"

    def __init__(self, collection: Any, client: AsyncIOMotorClient | None = None):
        self._col = collection
        self._client = client

    @classmethod
    def from_url(cls, url: str, database: str, collection: str) -> "MongoEventStore":
        """Connect with a new motor client that this store owns."""
        client = AsyncIOMotorClient(url, tz_aware=True)
        return cls(client[database][collection], client=client)

    async def create_indexes(self) -> None:
        """Create the ``(employeeId, createdAt, _id)`` query index. Idempotent."""
        await self._col.create_index(
            [("employeeId", ASCENDING), ("createdAt", ASCENDING), ("_id", ASCENDING)],
            name=self.INDEX_NAME,
        )

    async def insert(self, event: PersistentEmployeeEvent) -> PersistentEmployeeEvent:
        doc = self._to_doc(event)
        doc["createdAt"] = datetime.now(timezone.utc)
        result = await self._col.insert_one(doc)
        doc["_id"] = result.inserted_id
        stored = self._from_doc(doc)
        log.debug("store.inserted", id=stored.id, employee_id=stored.employee_id, store="mongo")
        return stored

    async def find_by_employee_id(
        self, employee_id: str, request: PageRequest
    ) -> Page[PersistentEmployeeEvent]:
        query = {"employeeId": employee_id}
        total = await self._col.count_documents(query)
        cursor = self._col.find(
            query,
            sort=[("createdAt", ASCENDING), ("_id", ASCENDING)],
            skip=request.offset,
            limit=request.size,
        )
        content = [self._from_doc(doc) async for doc in cursor]
        return Page.of(content, request.model_copy(update={"sort": CREATED_AT_ASC}), total)

    async def delete_all(self) -> int:
        result = await self._col.delete_many({})
        return result.deleted_count

    async def health_check(self) -> bool:
        try:
            await self._col.database.command("ping")
            return True
        except Exception as e:
            log.warning("mongo.health_check_failed", error=str(e))
            return False

    def close(self) -> None:
        """Close the motor client if this store created it."""
        if self._client is not None:
            self._client.close()
            self._client = None

    @staticmethod
    def _to_doc(event: PersistentEmployeeEvent) -> dict[str, Any]:
        return {
            "eventType": event.event_type.value,
            "employeeId": event.employee_id,
            "emailAddress": event.email_address,
            "firstName": event.first_name,
            "lastName": event.last_name,
            "birthday": event.birthday,
            "departmentName": event.department_name,
        }

    @staticmethod
    def _from_doc(doc: dict[str, Any]) -> PersistentEmployeeEvent:
        return PersistentEmployeeEvent(
            id=str(doc["_id"]),
            event_type=doc["eventType"],
            employee_id=doc["employeeId"],
            email_address=doc.get("emailAddress"),
            first_name=doc.get("firstName"),
            last_name=doc.get("lastName"),
            birthday=doc.get("birthday"),
            department_name=doc.get("departmentName"),
            created_at=doc.get("createdAt"),
        )
