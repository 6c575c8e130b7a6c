"""
Inventory Microservice

CRUD API over inventory items plus a read-only lookup of active discount
coupons, served under /api with uniform JSON envelopes.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional

from shared.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from inventory_api.core_settings import get_settings
from inventory_api.api.routes import router as inventory_router
from inventory_api.api.errors import register_exception_handlers
from inventory_api.infrastructure.db import DataStoreGateway, get_gateway

# Service configuration
SERVICE_NAME = "inventory-service"
SERVICE_DESCRIPTION = "Inventory management microservice"

settings = get_settings()
SERVICE_VERSION = settings.SERVICE_VERSION

setup_logging(
    service_name=SERVICE_NAME,
    level=settings.LOG_LEVEL,
    version=SERVICE_VERSION
)

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    logger.info(f"Starting {SERVICE_NAME} version {SERVICE_VERSION}")

    gateway: Optional[DataStoreGateway] = getattr(app.state, "gateway", None)
    if gateway is None:
        gateway = DataStoreGateway(
            settings.database_url,
            pool_size=settings.DB_POOL_SIZE,
            echo=settings.DB_ECHO
        )
        app.state.gateway = gateway

    if not gateway.test_connection():
        gateway.dispose()
        raise RuntimeError("Cannot start server without database connection")

    # Schema problems are logged only; the API stays reachable
    if not gateway.initialize_schema():
        logger.warning("Schema initialization failed, continuing startup")

    logger.info(f"{SERVICE_NAME} started successfully")

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")
    gateway.dispose()

def probe_store(request: Request) -> None:
    get_gateway(request).execute("SELECT 1")

def create_app(gateway: Optional[DataStoreGateway] = None) -> FastAPI:
    """Build the application; a gateway passed in is used instead of one built from settings."""
    app = FastAPI(
        title=SERVICE_NAME,
        description=SERVICE_DESCRIPTION,
        version=SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json"
    )
    app.state.gateway = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    health_service = ServiceHealth(SERVICE_NAME, SERVICE_VERSION, probe=probe_store)
    app.include_router(health_service.create_health_router(), prefix="/api")

    app.include_router(inventory_router)

    register_exception_handlers(app)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "status": "running",
            "docs": "/api/docs"
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("inventory_api.main:app", host="0.0.0.0", port=settings.PORT)
