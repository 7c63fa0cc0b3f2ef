"""
Prometheus metrics for the employee event service.
"""
from prometheus_client import Counter, Histogram, Gauge, Info, CollectorRegistry


class Metrics:
    """
    Centralized metrics for the employee event service.
    """

    def __init__(self, service_name: str = "employee-events", version: str = "0.1.0", registry=None):
        self.service_name = service_name
        self.version = version
        self.registry = registry or CollectorRegistry()

        # HTTP Metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["service", "method", "path", "status"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["service", "method", "path"],
            registry=self.registry,
        )

        self.http_requests_active = Gauge(
            "http_requests_active",
            "Number of active HTTP requests",
            ["service"],
            registry=self.registry,
        )
        self.http_requests_active.labels(service=service_name).set(0)

        # Application Info
        self.app_info = Info(
            "app",
            "Application information",
            registry=self.registry,
        )
        self.app_info.info({"service": service_name, "version": version})

        self.app_up = Gauge(
            "app_up",
            "Application up status (1=up, 0=down)",
            ["service", "version"],
            registry=self.registry,
        )
        self.app_up.labels(service=service_name, version=version).set(1)

        # Business Metrics - employee event relay
        self.events_received_total = Counter(
            "employee_events_received_total",
            "Employee messages received from the queue",
            ["event_type"],
            registry=self.registry,
        )

        self.events_persisted_total = Counter(
            "employee_events_persisted_total",
            "Employee events written to the store",
            ["event_type"],
            registry=self.registry,
        )

        self.events_dropped_total = Counter(
            "employee_events_dropped_total",
            "Employee messages consumed without being persisted",
            ["reason"],
            registry=self.registry,
        )

    def record_received(self, event_type: str):
        self.events_received_total.labels(event_type=event_type).inc()

    def record_persisted(self, event_type: str):
        self.events_persisted_total.labels(event_type=event_type).inc()

    def record_dropped(self, reason: str):
        """Record a message dropped by the poison-message policy."""
        self.events_dropped_total.labels(reason=reason).inc()
