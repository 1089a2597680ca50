"""
Job Board Service Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

logger = logging.getLogger(__name__)


class JobBoardSettings(BaseSettings):
    """
    Job board service configuration with validation.

    All settings can be overridden via environment variables
    (case-insensitive, no prefix: MONGODB_URI, AUTH_SECRET, ...).
    """

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, extra="ignore")

    # === Runtime ===
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    port: int = Field(default=5001, ge=1, le=65535, description="HTTP port")

    # === Security ===
    auth_secret: Optional[str] = Field(
        default=None,
        min_length=16,
        description="Secret used to sign bearer tokens (min 16 chars)"
    )

    # === CORS ===
    cors_origins: str = Field(
        default="http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # === MongoDB ===
    mongodb_uri: Optional[str] = Field(
        default=None,
        description="MongoDB connection URI (unset = in-memory store)"
    )
    mongo_db_name: str = Field(default="jobboard", description="MongoDB database name")
    jobs_collection: str = Field(default="jobs", description="Collection holding job postings")

    # === Uploads ===
    upload_dir: str = Field(
        default="uploads/resumes",
        description="Directory where uploaded résumés are stored"
    )
    max_upload_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1,
        description="Upload size ceiling in bytes (default 5 MiB)"
    )

    # === Search ===
    suggestion_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Postings scanned (and titles returned) per suggestion request"
    )

    # === Logging ===
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")
    log_format: str = Field(default="simple", description="simple or json")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("auth_secret")
    @classmethod
    def validate_secret_strength(cls, v: Optional[str]) -> Optional[str]:
        """Reject obviously weak signing secrets."""
        if v is None:
            return None
        weak_secrets = {"secret", "password", "changeme", "changemechangeme"}
        if v.lower() in weak_secrets or len(set(v)) < 4:
            raise ValueError("Auth secret is too weak - use a secure random string")
        return v

    @field_validator("mongodb_uri")
    @classmethod
    def validate_mongodb_uri(cls, v: Optional[str]) -> Optional[str]:
        """Basic URI format validation; empty string means unset."""
        if not v:
            return None
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(f"Invalid MongoDB URI format: {v.split('@')[-1]}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in {"simple", "json"}:
            raise ValueError("log_format must be 'simple' or 'json'")
        return v_lower

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if not self.cors_origins:
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def validate_production_config(self) -> List[str]:
        """
        Validate configuration is suitable for production.

        Returns list of warning/error messages.
        """
        issues = []

        if self.is_production:
            if not self.auth_secret:
                issues.append("CRITICAL: AUTH_SECRET required in production")
            if not self.mongodb_uri:
                issues.append("CRITICAL: MONGODB_URI required in production")
            elif "localhost" in self.mongodb_uri:
                issues.append("WARNING: Using localhost MongoDB in production")
            if not self.cors_origins:
                issues.append("WARNING: CORS_ORIGINS not configured")
        elif not self.mongodb_uri:
            issues.append("WARNING: MONGODB_URI not set, using in-memory job store")

        return issues


@lru_cache()
def get_settings() -> JobBoardSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached; call get_settings.cache_clear()
    after changing the environment (tests do this).
    """
    return JobBoardSettings()


def _redact_uri(uri: Optional[str]) -> str:
    if not uri:
        return "<in-memory>"
    if "localhost" in uri or "127.0.0.1" in uri:
        return uri
    return "*****"


def validate_config_on_startup() -> None:
    """
    Validate configuration at application startup.

    Raises ValueError with details if config is invalid.
    Logs warnings for non-critical issues.
    """
    try:
        settings = get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")

    for issue in settings.validate_production_config():
        if issue.startswith("CRITICAL"):
            raise ValueError(issue)
        logger.warning(issue)

    # Log loaded configuration (redact secrets)
    logger.info(f"Configuration loaded: environment={settings.environment}")
    logger.info(f"  mongodb_uri={_redact_uri(settings.mongodb_uri)}")
    logger.info(f"  upload_dir={settings.upload_dir} (max {settings.max_upload_bytes} bytes)")
    logger.info(f"  auth_configured={settings.auth_secret is not None}")
