"""
Exception handlers that render every failure into the response envelope.

All handled errors leave the API as {"status": "error", "message": ...}:
  AuthError                 -> 401, always "Unauthorized"
  other AppError            -> its status_code and message (400 for business errors)
  RequestValidationError    -> 400 with the first validation problem
  OperationalError, pool TimeoutError, InterfaceError -> 503 (retryable)
  other SQLAlchemyError     -> 400
  anything else             -> 500, generic message, traceback in the logs only
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from jobtracker.core.errors import AppError, AuthError, InfrastructureError
from jobtracker.schemas.envelope import error_body

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized"


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    """Uniform 401: the reason (missing, invalid, expired) stays in the logs."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=401,
        content=error_body(UNAUTHORIZED_MESSAGE),
        headers={"WWW-Authenticate": "Bearer"},
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters are ordinary 400s."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content=error_body(message))


async def database_unavailable_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database unavailable on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=InfrastructureError.status_code,
        content=error_body(InfrastructureError.message),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.warning(f"Database rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content=error_body("Database rejected the request"))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_body("An unexpected error occurred"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(OperationalError, database_unavailable_handler)
    app.add_exception_handler(InterfaceError, database_unavailable_handler)
    app.add_exception_handler(PoolTimeoutError, database_unavailable_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
