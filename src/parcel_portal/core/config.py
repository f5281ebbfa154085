"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Defaults mirror the portal's production behavior (30 minute idle timeout,
  5 minute warning, 3 second lookups against ipify/ipapi)

Usage:
    from parcel_portal.core.config import get_settings

    settings = get_settings()
    timeout = settings.session_timeout

    if settings.is_development:
        # Dev-specific behavior
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from parcel_portal.core.enums import Environment


class Settings(BaseSettings):
    """
    Package settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values (only for non-sensitive config)

    Returns:
        Settings: Configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment (development, testing, ci, production)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="FLDP-GIS-Portal",
        description="Application name (sent as User-Agent to lookup services)",
    )
    app_version: str = Field(
        default="1.0",
        description="Application version",
    )

    # Session lifecycle
    session_timeout_minutes: int = Field(
        default=30,
        description="Inactivity window after which the session is signed out",
    )
    session_warning_minutes: int = Field(
        default=5,
        description="How long before expiry the inactivity warning is raised",
    )
    warning_poll_seconds: float = Field(
        default=30.0,
        description="Interval of the inactivity warning check",
    )
    expiry_poll_seconds: float = Field(
        default=60.0,
        description="Interval of the inactivity expiry check",
    )
    sign_out_on_hidden: bool = Field(
        default=True,
        description="Sign out when the page reports it became hidden",
    )

    # Client probing and geolocation
    ip_echo_url: str = Field(
        default="https://api.ipify.org",
        description="IP echo service base URL (queried with format=json)",
    )
    geolocation_url_template: str = Field(
        default="https://ipapi.co/{ip}/json/",
        description="IP geolocation URL template; {ip} is substituted",
    )
    client_probe_timeout_seconds: float = Field(
        default=3.0,
        description="Timeout for IP echo and geolocation lookups",
    )
    client_user_agent: str = Field(
        default="",
        description="User agent recorded for this client",
    )
    client_referrer: str | None = Field(
        default=None,
        description="Referrer recorded for this client",
    )

    # Audit storage
    access_logs_table: str = Field(
        default="access_logs",
        description="Table receiving one row per access event",
    )

    # Hosted backend
    backend_type: Literal["memory", "rest"] = Field(
        default="memory",
        description="Auth/table backend adapter ('memory' or 'rest')",
    )
    backend_url: str | None = Field(
        default=None,
        description="Hosted backend project URL (required for 'rest')",
    )
    backend_api_key: str | None = Field(
        default=None,
        description="Hosted backend public API key (required for 'rest')",
    )
    backend_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for hosted backend calls",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "session_timeout_minutes",
        "session_warning_minutes",
        "warning_poll_seconds",
        "expiry_poll_seconds",
        "client_probe_timeout_seconds",
        "backend_timeout_seconds",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """
        Validate durations are positive.

        Raises:
            ValueError: If the value is zero or negative.
        """
        if v <= 0:
            raise ValueError("durations and intervals must be positive")
        return v

    @field_validator("ip_echo_url", "backend_url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """
        Remove trailing slashes from URLs.
        """
        return v.rstrip("/") if v else v

    @model_validator(mode="after")
    def validate_warning_window(self) -> "Settings":
        """
        Validate the warning fires before the session times out.

        Raises:
            ValueError: If the warning window is not shorter than the timeout.
        """
        if self.session_warning_minutes >= self.session_timeout_minutes:
            raise ValueError(
                "session_warning_minutes must be less than session_timeout_minutes"
            )
        return self

    @property
    def session_timeout(self) -> timedelta:
        """Inactivity window as a timedelta."""
        return timedelta(minutes=self.session_timeout_minutes)

    @property
    def session_warning(self) -> timedelta:
        """Warning lead time as a timedelta."""
        return timedelta(minutes=self.session_warning_minutes)

    @property
    def lookup_user_agent(self) -> str:
        """User-Agent header sent to the IP echo and geolocation services."""
        return f"{self.app_name}/{self.app_version}"

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache so settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()
