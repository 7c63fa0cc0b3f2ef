"""
Health checks for liveness and readiness probes.
"""
from datetime import datetime, timezone
from typing import Dict, Any
import psutil
from .logging import get_logger
from .store.base import EmployeeEventStore
from .transport.base import MessageTransport

logger = get_logger()


class HealthChecker:
    """
    Health checker for the employee event service.

    Provides:
    - Liveness checks (is the service running?)
    - Readiness checks (can the service consume messages and answer queries?)
    """

    def __init__(
        self,
        transport: MessageTransport,
        store: EmployeeEventStore,
        service_name: str = "employee-events",
        version: str = "0.1.0",
    ):
        self.transport = transport
        self.store = store
        self.service_name = service_name
        self.version = version

    def liveness(self) -> Dict[str, Any]:
        """
        Liveness check - basic health check.

        Returns:
            dict: Health status with service info and timestamp
        """
        return {
            "status": "ok",
            "service": self.service_name,
            "version": self.version,
            "timestamp": _now(),
        }

    async def readiness(self) -> Dict[str, Any]:
        """
        Readiness check - comprehensive health check.

        Checks:
        - Message transport connectivity
        - Event store connectivity
        - Disk space availability
        - Memory availability

        Returns:
            dict: Readiness status with detailed check results
        """
        checks = {
            "transport": await self._check_backend(self.transport.health_check, "transport"),
            "store": await self._check_backend(self.store.health_check, "store"),
            "disk_space": self._check_disk_space(),
            "memory": self._check_memory(),
        }
        overall_status = "not_ready" if any(c["status"] == "error" for c in checks.values()) else "ready"

        return {
            "status": overall_status,
            "service": self.service_name,
            "version": self.version,
            "timestamp": _now(),
            "checks": checks,
        }

    async def _check_backend(self, probe, name: str) -> Dict[str, Any]:
        try:
            healthy = await probe()
        except Exception as e:
            logger.warning("health_check_failed", check=name, error=str(e))
            return {"status": "error", "error": str(e)}
        return {"status": "ok"} if healthy else {"status": "error", "error": f"{name} unreachable"}

    def _check_disk_space(self, threshold_gb: float = 1.0) -> Dict[str, Any]:
        """
        Check available disk space.

        Args:
            threshold_gb: Minimum available disk space in GB (default: 1.0)

        Returns:
            dict: Disk space health check result
        """
        try:
            disk = psutil.disk_usage("/")
            available_gb = disk.free / (1024**3)

            if available_gb < threshold_gb:
                status = "error"
            elif available_gb < threshold_gb * 2:
                status = "warning"
            else:
                status = "ok"

            return {
                "status": status,
                "available_gb": round(available_gb, 2),
                "total_gb": round(disk.total / (1024**3), 2),
                "used_percent": disk.percent,
            }

        except Exception as e:
            logger.warning("disk_health_check_failed", error=str(e))
            return {
                "status": "error",
                "error": str(e),
            }

    def _check_memory(self, threshold_mb: float = 50.0) -> Dict[str, Any]:
        """
        Check available memory.

        Args:
            threshold_mb: Minimum available memory in MB (default: 50.0)

        Returns:
            dict: Memory health check result
        """
        try:
            memory = psutil.virtual_memory()
            available_mb = memory.available / (1024**2)

            if available_mb < threshold_mb:
                status = "error"
            elif available_mb < threshold_mb * 2:
                status = "warning"
            else:
                status = "ok"

            return {
                "status": status,
                "available_mb": round(available_mb, 2),
                "total_mb": round(memory.total / (1024**2), 2),
                "used_percent": memory.percent,
            }

        except Exception as e:
            logger.warning("memory_health_check_failed", error=str(e))
            return {
                "status": "error",
                "error": str(e),
            }


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
