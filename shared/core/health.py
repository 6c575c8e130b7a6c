"""
Health and metrics endpoints.

The store probe is supplied by the service so this router stays independent
of how the service reaches its database.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Callable, Dict
import time
from datetime import datetime, timezone
from enum import Enum
import psutil
import logging

logger = logging.getLogger(__name__)

class HealthStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"

class ServiceHealth:
    """
    Health check state for one service.

    probe is called with the current request and must raise when the store
    is unreachable; it is never retried.
    """

    def __init__(self, service_name: str, version: str, probe: Callable[[Request], Any]):
        self.service_name = service_name
        self.version = version
        self.probe = probe
        self.start_time = time.time()
        self.checks_performed = 0
        self.last_check_time = None

    def check_store(self, request: Request) -> HealthStatus:
        self.checks_performed += 1
        self.last_check_time = time.time()
        try:
            self.probe(request)
        except Exception:
            logger.exception("Database health check failed")
            return HealthStatus.FAIL
        return HealthStatus.PASS

    def create_health_router(self) -> APIRouter:
        router = APIRouter(tags=["health"])

        @router.get("/health")
        def health_check(request: Request) -> JSONResponse:
            """Probe the store with a trivial query"""
            if self.check_store(request) == HealthStatus.FAIL:
                return JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content={"success": False, "error": "Database connection failed"}
                )
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content={
                    "success": True,
                    "message": "Server and database are running properly",
                    "timestamp": datetime.now(timezone.utc).isoformat()
                }
            )

        @router.get("/health/live")
        def liveness() -> Dict[str, Any]:
            """Liveness probe, never touches the store"""
            return {"success": True, "status": "alive"}

        @router.get("/metrics")
        def metrics() -> Dict[str, Any]:
            process = psutil.Process()
            memory = process.memory_info()
            return {
                "service": self.service_name,
                "version": self.version,
                "uptime_seconds": time.time() - self.start_time,
                "checks_performed": self.checks_performed,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "system": {
                    "memory_rss_bytes": memory.rss,
                    "memory_vms_bytes": memory.vms,
                    "num_threads": process.num_threads()
                }
            }

        return router
