"""Store selection from settings."""
import structlog
from .base import EmployeeEventStore
from .memory import InMemoryEventStore
from .mongo import MongoEventStore
from ..config import Settings

log = structlog.get_logger()


def create_store(settings: Settings) -> EmployeeEventStore:
    """
    Create the store selected by STORE_ADAPTER.

    Returns:
        EmployeeEventStore instance; falls back to memory when MongoDB is not configured
    """
    if settings.STORE_ADAPTER == "mongo":
        if not settings.MONGO_URL:
            log.warning(
                "store.fallback",
                requested="mongo",
                actual="memory",
                reason="MONGO_URL not configured"
            )
            return InMemoryEventStore()

        log.info("store.selected", type="mongo", database=settings.MONGO_DATABASE, collection=settings.MONGO_COLLECTION)
        return MongoEventStore.from_url(settings.MONGO_URL, settings.MONGO_DATABASE, settings.MONGO_COLLECTION)

    log.info("store.selected", type="memory")
    return InMemoryEventStore()
