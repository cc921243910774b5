"""
Centralized configuration management for the Job Application Tracker.
All environment variables, secrets and runtime switches are managed here.
"""
import secrets
from typing import Optional, List
from pydantic import validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings with validation and type hints."""

    # =============================================================================
    # APPLICATION SETTINGS
    # =============================================================================
    app_name: str = "Job Application Tracker"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    testing: bool = False

    # =============================================================================
    # SECURITY SETTINGS
    # =============================================================================
    secret_key: str = secrets.token_urlsafe(32)
    algorithm: str = "HS256"
    bcrypt_rounds: int = 12

    # Session cookie
    session_cookie_name: str = "sid"
    session_max_age_minutes: int = 7 * 24 * 60  # 7 days
    session_cookie_secure: bool = False
    session_cookie_samesite: str = "lax"

    @validator('session_cookie_samesite')
    def validate_samesite(cls, v):
        v = v.lower()
        if v not in ("lax", "strict", "none"):
            raise ValueError('session_cookie_samesite must be one of: lax, strict, none')
        return v

    @validator('bcrypt_rounds')
    def validate_bcrypt_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError('bcrypt_rounds must be between 4 and 31')
        return v

    # =============================================================================
    # DATABASE SETTINGS
    # =============================================================================
    database_url: str = "sqlite:///./job_tracker.db"
    database_echo: bool = False

    # =============================================================================
    # LOGGING SETTINGS
    # =============================================================================
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"

    # =============================================================================
    # DEVELOPMENT SETTINGS
    # =============================================================================
    api_docs_enabled: bool = True
    cors_enabled: bool = True
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # =============================================================================
    # CONFIGURATION LOADING
    # =============================================================================
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.testing or self.environment.lower() == "testing"

    def get_database_url(self) -> str:
        """Get database URL with appropriate settings for environment."""
        if self.is_testing():
            return "sqlite:///:memory:"
        return self.database_url

    def validate_required_settings(self) -> List[str]:
        """Validate that all required settings are properly configured."""
        missing = []

        if self.is_production():
            if not self.secret_key or len(self.secret_key) < 32:
                missing.append("SECRET_KEY must be at least 32 characters in production")

            if not self.session_cookie_secure:
                missing.append("SESSION_COOKIE_SECURE must be True in production")

            if self.debug:
                missing.append("DEBUG must be False in production")

        if self.session_cookie_samesite == "none" and not self.session_cookie_secure:
            missing.append("SESSION_COOKIE_SAMESITE=none requires SESSION_COOKIE_SECURE")

        if self.log_level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            missing.append(f"Invalid LOG_LEVEL: {self.log_level}")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    This function is cached to avoid recreating the settings object multiple times.
    """
    return Settings()


# Global settings instance
settings = get_settings()
