"""Shared configuration management for the import tool.

Based on Pydantic Settings v2 best practices:
https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with the prefix 'APP_'.
    Example: APP_LOG_LEVEL=debug

    Fakturoid credentials are not settings; they are passed on the command line.
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    service_name: str = Field(
        default="invoicing-import",
        description="Service identifier for logs",
    )
    service_version: str = Field(
        default="0.1.0",
        description="Service version",
    )

    # Legacy database (source)
    legacy_database_url: str = Field(
        default="sqlite:///invoicing.db",
        description="SQLAlchemy URL of the legacy invoicing database",
    )
    legacy_database_echo: bool = Field(
        default=False,
        description="Log every SQL statement sent to the legacy database",
    )

    # Fakturoid API (target)
    fakturoid_base_url: str = Field(
        default="https://app.fakturoid.cz/api/v2",
        description="Fakturoid API root, without the account segment",
    )
    fakturoid_user_agent: str = Field(
        default="InvoicingImport",
        description="Application name sent in User-Agent (the account email is appended)",
    )
    http_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for a single API request",
    )
    http_retry_attempts: int = Field(
        default=3,
        ge=1,
        description=(
            "Attempts per listing or delete request on transport errors "
            "(1 disables retries; creates are never resent)"
        ),
    )

    # Import behaviour
    orphan_invoice_policy: Literal["abort", "skip"] = Field(
        default="abort",
        description=(
            "What to do with an invoice whose contact was not imported: "
            "abort (stop the run) or skip (log and continue)"
        ),
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        """Accept level names in any case (APP_LOG_LEVEL=debug)."""
        if isinstance(value, str):
            return value.strip().upper()
        return value


def get_settings() -> Settings:
    """Factory function to get settings instance.

    Returns:
        Configured Settings instance
    """
    return Settings()
