"""
Exception handlers that turn every failure into the standard error envelope

``{"message", "status": false, "error_type", "details"}``
"""

from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ngo_admin.core.config import settings
from ngo_admin.core.exceptions import (
    AdminError,
    DatabaseError,
    DuplicateRecordError,
    RecordValidationError,
    create_error_response,
)
from ngo_admin.registry import ENTITY_REGISTRY, EntityConfig

logger = structlog.get_logger()


def _error_json(error: AdminError, headers=None) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=create_error_response(error), headers=headers)


def entity_for_path(path: str) -> Optional[EntityConfig]:
    """Registered entity whose routes serve ``path``, if any"""
    prefix = settings.API_V1_STR.rstrip("/") + "/"
    if not path.startswith(prefix):
        return None
    return ENTITY_REGISTRY.get(path[len(prefix):].split("/", 1)[0])


def integrity_error(path: str) -> AdminError:
    """
    Map a constraint violation to the error the client sees.

    Entities with unique fields report a duplicate on their first unique
    field; any other violation is a bad request.
    """
    entity = entity_for_path(path)
    if entity is not None and entity.unique_fields:
        return DuplicateRecordError(entity.unique_fields[0], None, entity.label)
    return RecordValidationError("Database integrity constraint violation")


async def admin_error_handler(request: Request, exc: AdminError) -> JSONResponse:
    logger.warning(
        "admin_error",
        error_type=exc.__class__.__name__,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method,
    )
    return _error_json(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework 404/405 responses and explicit raises"""
    logger.warning("http_error", status_code=exc.status_code, detail=exc.detail, path=request.url.path)
    error = AdminError(str(exc.detail), status_code=exc.status_code)
    content = create_error_response(error)
    content["error_type"] = "HTTPException"
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": " -> ".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning("request_invalid", path=request.url.path, fields=[e["field"] for e in errors])
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": "Validation error occurred",
            "status": False,
            "error_type": "ValidationError",
            "details": {"validation_errors": errors},
        },
    )


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    if isinstance(exc, IntegrityError):
        error = integrity_error(request.url.path)
    else:
        error = DatabaseError("Database operation failed", operation=request.method)
    logger.error(
        "database_error",
        error_type=exc.__class__.__name__,
        reported_as=error.__class__.__name__,
        path=request.url.path,
        method=request.method,
    )
    return _error_json(error)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unexpected_error",
        error_type=exc.__class__.__name__,
        path=request.url.path,
        method=request.method,
        exc_info=True,
    )
    content = create_error_response(
        AdminError("An unexpected error occurred. Please try again later.", status.HTTP_500_INTERNAL_SERVER_ERROR)
    )
    content["error_type"] = "InternalServerError"
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AdminError, admin_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
