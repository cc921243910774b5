"""
Health check and system status API endpoints.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Any
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config.settings import get_settings
from ..models.db.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


@router.get("/health", summary="Health Check")
def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns system status and configuration info.
    """
    return {
        "status": "healthy",
        "message": f"Welcome to {settings.app_name} v{settings.app_version}",
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/health/detailed", summary="Detailed Health Check")
def detailed_health_check() -> Dict[str, Any]:
    """
    Detailed health check with configuration and session status.
    """
    health_status = {
        "status": "healthy",
        "app_info": {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "debug": settings.debug,
            "testing": settings.testing
        },
        "configuration": {
            "log_level": settings.log_level,
            "database_configured": bool(settings.database_url),
            "cors_enabled": settings.cors_enabled,
            "api_docs_enabled": settings.api_docs_enabled
        },
        "security": {
            "secret_key_configured": bool(settings.secret_key),
            "session_cookie_secure": settings.session_cookie_secure,
            "session_max_age_minutes": settings.session_max_age_minutes
        }
    }

    config_issues = settings.validate_required_settings()
    if config_issues:
        health_status["status"] = "degraded"
        health_status["configuration_issues"] = config_issues
        logger.warning("Configuration issues found: %s", config_issues)

    return health_status


@router.get("/db-health", summary="Database Health Check")
def database_health_check(db: Session = Depends(get_db)):
    """
    Run a trivial query against the store.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"ok": False, "detail": "Database unavailable"},
        )
    return {"ok": True}


@router.get("/config/validate", summary="Validate Configuration")
def validate_configuration() -> Dict[str, Any]:
    config_issues = settings.validate_required_settings()

    validation_result = {
        "valid": len(config_issues) == 0,
        "environment": settings.environment,
        "issues_count": len(config_issues),
        "issues": config_issues
    }

    if not validation_result["valid"]:
        logger.error("Configuration validation failed: %s", config_issues)

    return validation_result


@router.get("/config/settings", summary="Configuration Overview")
def get_configuration_overview() -> Dict[str, Any]:
    """
    Get a safe overview of current configuration (no sensitive data).
    """
    return {
        "app_name": settings.app_name,
        "app_version": settings.app_version,
        "environment": settings.environment,
        "debug": settings.debug,
        "log_level": settings.log_level,
        "database_type": "sqlite" if "sqlite" in settings.database_url else "other",
        "cors_enabled": settings.cors_enabled,
        "api_docs_enabled": settings.api_docs_enabled,
        "session_cookie_name": settings.session_cookie_name,
        "session_max_age_minutes": settings.session_max_age_minutes,
    }
