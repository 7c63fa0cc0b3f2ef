"""
Employee event service - relays employee lifecycle messages into a queryable event log.

Features:
- Queue consumers turning employee messages into persisted events
- Paginated event history per employee
- Structured logging with correlation IDs
- Prometheus metrics
- Health checks (liveness and readiness)
"""
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from .config import Settings, get_settings
from .logging import setup_logging, get_logger
from .api.router import router
from .middleware.correlation import CorrelationMiddleware
from .middleware.error_handler import ErrorHandlerMiddleware, validation_exception_handler
from .middleware.metrics import MetricsMiddleware
from .metrics import Metrics
from .health import HealthChecker
from .services.employee_event_service import EmployeeEventService
from .services.event_bus import LocalEventBus
from .services.event_receiver import EmployeeMessageReceiver
from .store.base import EmployeeEventStore
from .store.factory import create_store
from .store.mongo import MongoEventStore
from .transport.base import MessageTransport
from .transport.factory import create_transport

VERSION = "0.1.0"

logger = get_logger()


def create_app(
    settings: Settings | None = None,
    transport: MessageTransport | None = None,
    store: EmployeeEventStore | None = None,
) -> FastAPI:
    """
    Build the application and wire its collaborators.

    Args:
        settings: Configuration (defaults to environment settings)
        transport: Message transport (defaults to the configured adapter)
        store: Event store (defaults to the configured adapter)
    """
    settings = settings or get_settings()
    setup_logging(json_output=settings.LOG_JSON, service_name=settings.SERVICE_NAME)

    transport = transport or create_transport(settings)
    store = store or create_store(settings)
    metrics = Metrics(service_name=settings.SERVICE_NAME, version=VERSION)

    event_bus = LocalEventBus()
    event_service = EmployeeEventService(store, metrics=metrics, max_page_size=settings.MAX_PAGE_SIZE)
    event_service.register(event_bus)
    receiver = EmployeeMessageReceiver(event_bus, metrics=metrics)
    health_checker = HealthChecker(transport, store, service_name=settings.SERVICE_NAME, version=VERSION)

    app = FastAPI(
        title="Employee Event Service",
        version=VERSION,
        description="Consumes employee lifecycle messages and serves each employee's event history",
    )
    app.state.settings = settings
    app.state.transport = transport
    app.state.store = store
    app.state.metrics = metrics
    app.state.event_bus = event_bus
    app.state.event_service = event_service
    app.state.receiver = receiver

    # Last added runs first: correlation id, then metrics, then error mapping
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(MetricsMiddleware, metrics=metrics)
    app.add_middleware(CorrelationMiddleware)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(router)
    app.mount("/metrics", make_asgi_app(registry=metrics.registry))

    @app.get("/health")
    async def health():
        """
        Liveness probe - basic health check.

        Returns 200 if service is running.
        """
        logger.debug("health_check_liveness")
        return health_checker.liveness()

    @app.get("/health/ready")
    async def health_ready():
        """
        Readiness probe - transport, store and host resources.

        Returns:
            200: Service is ready to handle traffic
            503: Service is not ready
        """
        logger.debug("health_check_readiness")
        result = await health_checker.readiness()
        status_code = 200 if result["status"] == "ready" else 503
        return JSONResponse(result, status_code=status_code)

    @app.on_event("startup")
    async def startup_event():
        """Prepare the store and start the queue consumers."""
        logger.info(
            "service_starting",
            version=VERSION,
            env=settings.ENV,
            transport=type(transport).__name__,
            store=type(store).__name__,
            consumers=settings.CONCURRENT_CONSUMERS,
        )
        if isinstance(store, MongoEventStore):
            await store.create_indexes()
        await transport.start(receiver.on_message, consumers=settings.CONCURRENT_CONSUMERS)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Stop consumers and release connections."""
        logger.info("service_stopping")
        await transport.stop()
        if isinstance(store, MongoEventStore):
            store.close()
        metrics.app_up.labels(service=settings.SERVICE_NAME, version=VERSION).set(0)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "employee_events.main:app",
        host="0.0.0.0",
        port=get_settings().SERVICE_PORT,
        reload=True,
    )
