import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_api.core.constants import INTERNAL_ERROR, ROUTE_NOT_FOUND
from inventory_api.core.exceptions import InventoryError, StoreError
from inventory_api.core.responses import error_response
from inventory_api.core.validation import describe_validation_errors

logger = logging.getLogger(__name__)


async def inventory_error_handler(request: Request, exc: InventoryError):
    if isinstance(exc, StoreError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.message)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, describe_validation_errors(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods on known paths both read as a missing route.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(status.HTTP_404_NOT_FOUND, ROUTE_NOT_FOUND)
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
