"""
Test centralized configuration management.
"""
import logging
import os

import pytest
from unittest.mock import patch
from fastapi import status


class TestConfigurationManagement:
    """Test centralized configuration system."""

    def test_settings_loading_with_defaults(self):
        from job_tracker_app.backend.config.settings import Settings

        settings = Settings(_env_file=None)

        assert settings.app_name == "Job Application Tracker"
        assert settings.algorithm == "HS256"
        assert settings.session_cookie_name == "sid"
        assert settings.session_max_age_minutes == 7 * 24 * 60
        assert settings.session_cookie_samesite == "lax"
        assert len(settings.secret_key) >= 32

    def test_settings_with_environment_variables(self):
        from job_tracker_app.backend.config.settings import Settings

        test_env = {
            "SECRET_KEY": "test-secret-key-12345678901234567890123456789012",
            "LOG_LEVEL": "DEBUG",
            "ENVIRONMENT": "testing",
            "DATABASE_URL": "sqlite:///./other.db",
            "SESSION_COOKIE_SAMESITE": "Strict",
        }

        with patch.dict(os.environ, test_env):
            settings = Settings(_env_file=None)

            assert settings.secret_key == test_env["SECRET_KEY"]
            assert settings.log_level == "DEBUG"
            assert settings.environment == "testing"
            assert settings.database_url == "sqlite:///./other.db"
            assert settings.session_cookie_samesite == "strict"

    def test_environment_detection_methods(self):
        from job_tracker_app.backend.config.settings import Settings

        with patch.dict(os.environ, {"ENVIRONMENT": "development", "TESTING": "false"}):
            settings = Settings(_env_file=None)
            assert settings.is_development()
            assert not settings.is_production()
            assert not settings.is_testing()

        with patch.dict(os.environ, {"ENVIRONMENT": "production", "TESTING": "false"}):
            settings = Settings(_env_file=None)
            assert settings.is_production()
            assert not settings.is_development()

        with patch.dict(os.environ, {"TESTING": "true"}):
            settings = Settings(_env_file=None)
            assert settings.is_testing()
            assert settings.get_database_url() == "sqlite:///:memory:"

    def test_configuration_validation_production(self):
        from job_tracker_app.backend.config.settings import Settings

        with patch.dict(os.environ, {
            "ENVIRONMENT": "production",
            "DEBUG": "true",
            "SECRET_KEY": "short",
            "SESSION_COOKIE_SECURE": "false",
        }):
            issues = Settings(_env_file=None).validate_required_settings()

            assert any("DEBUG must be False" in issue for issue in issues)
            assert any("SECRET_KEY must be at least 32 characters" in issue for issue in issues)
            assert any("SESSION_COOKIE_SECURE" in issue for issue in issues)

    def test_invalid_log_level_reported(self):
        from job_tracker_app.backend.config.settings import Settings

        with patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}):
            issues = Settings(_env_file=None).validate_required_settings()
            assert "Invalid LOG_LEVEL: LOUD" in issues

    def test_field_validation(self):
        from job_tracker_app.backend.config.settings import Settings
        from pydantic import ValidationError

        with patch.dict(os.environ, {"SESSION_COOKIE_SAMESITE": "sometimes"}):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

        with patch.dict(os.environ, {"BCRYPT_ROUNDS": "2"}):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_settings_caching(self):
        from job_tracker_app.backend.config.settings import get_settings

        assert get_settings() is get_settings()


class TestHealthCheckEndpoints:

    def test_basic_health_check(self, test_client):
        response = test_client.get("/api/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert "Job Application Tracker" in data["message"]
        assert "environment" in data
        assert "timestamp" in data

    def test_detailed_health_check(self, test_client):
        data = test_client.get("/api/health/detailed").json()

        for section in ["app_info", "configuration", "security"]:
            assert section in data
        assert data["app_info"]["name"] == "Job Application Tracker"
        assert "session_cookie_secure" in data["security"]

    def test_db_health(self, test_client):
        response = test_client.get("/api/db-health")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"ok": True}

    def test_configuration_validation_endpoint(self, test_client):
        data = test_client.get("/api/config/validate").json()

        assert "valid" in data
        assert "issues_count" in data
        assert isinstance(data["issues"], list)

    def test_configuration_overview_hides_secrets(self, test_client):
        data = test_client.get("/api/config/settings").json()

        assert data["session_cookie_name"] == "sid"
        assert "secret_key" not in data
        assert "database_url" not in data


class TestConfigurationIntegration:

    def test_security_uses_centralized_config(self):
        from job_tracker_app.backend.security import SECRET_KEY, ALGORITHM, SESSION_EXPIRE_MINUTES
        from job_tracker_app.backend.config.settings import get_settings

        settings = get_settings()

        assert SECRET_KEY == settings.secret_key
        assert ALGORITHM == settings.algorithm
        assert SESSION_EXPIRE_MINUTES == settings.session_max_age_minutes


class TestLoggingSetup:

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root_logger = logging.getLogger()
        handlers, level = root_logger.handlers[:], root_logger.level
        yield
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            if handler not in handlers:
                handler.close()
        for handler in handlers:
            root_logger.addHandler(handler)
        root_logger.setLevel(level)

    def test_file_handler_and_level(self, tmp_path):
        from job_tracker_app.backend.utils.logging_config import setup_logging, get_logger

        log_file = tmp_path / "tracker.log"
        setup_logging(level="warning", log_file=str(log_file), fmt="%(levelname)s %(message)s")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 2

        get_logger("job_tracker_app.test").warning("disk nearly full")
        get_logger("job_tracker_app.test").info("not written")
        for handler in root_logger.handlers:
            handler.flush()

        contents = log_file.read_text()
        assert "WARNING disk nearly full" in contents
        assert "not written" not in contents

    def test_repeat_setup_replaces_handlers(self):
        from job_tracker_app.backend.utils.logging_config import setup_logging

        setup_logging(level="DEBUG")
        setup_logging(level="DEBUG")

        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
