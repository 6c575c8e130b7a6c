"""Maps the error taxonomy onto JSON envelopes.

Clients only ever see the fixed message carried by the error; store failure
details go to the server log.
"""
from contextlib import contextmanager
from typing import Iterator
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from shared.core import get_logger
from inventory_api.domain.errors import InventoryError, StoreError

logger = get_logger(__name__)

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})

@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """Turn any SQLAlchemy failure inside the block into a StoreError with a fixed message"""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(message)
        raise StoreError(message) from exc

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info(
            f"Rejected payload for {request.method} {request.url.path}",
            extra={'extra_fields': {'errors': exc.errors()}}
        )
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request payload")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods on known paths both count as missing endpoints
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            path = request.url.path
            if request.url.query:
                path = f"{path}?{request.url.query}"
            return error_response(status.HTTP_404_NOT_FOUND, f"Endpoint {request.method} {path} not found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error: {request.method} {request.url.path}", exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
