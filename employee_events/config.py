from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    SERVICE_NAME: str = "employee-events"
    SERVICE_PORT: int = 8080
    LOG_JSON: bool = True
    # Message transport: "memory" or "redis"
    TRANSPORT_ADAPTER: Literal["memory", "redis"] = "memory"
    REDIS_URL: AnyUrl | None = None
    QUEUE_NAME: str = "employee-events"
    CONSUMER_GROUP: str = "event-service"
    CONCURRENT_CONSUMERS: int = Field(default=1, ge=1, le=20)
    STREAM_MAXLEN: int = 10000
    # Document store: "memory" or "mongo"
    STORE_ADAPTER: Literal["memory", "mongo"] = "memory"
    MONGO_URL: str | None = None
    MONGO_DATABASE: str = "employee-events"
    MONGO_COLLECTION: str = "employee-events"
    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(default=50, ge=1, le=200)
    # Hard upper bound on page size, never above 200
    MAX_PAGE_SIZE: int = Field(default=200, ge=1, le=200)

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
