"""
Common API utilities shared across the API modules.
"""
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


def check_resource_exists(resource: Optional[object], resource_type: str) -> None:
    """
    Raise a 404 if the resource is missing.

    Raises:
        HTTPException: If resource is None
    """
    if resource is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource_type} not found"
        )


def handle_service_error(error: Exception, service_name: str) -> JSONResponse:
    """
    Standardized response for unexpected store or service failures.
    """
    logger.error("%s error: %s", service_name, error)
    if isinstance(error, SQLAlchemyError):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Database error"},
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"An unexpected error occurred in {service_name}"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database failure on %s %s", request.method, request.url.path)
        return handle_service_error(exc, "Database")
