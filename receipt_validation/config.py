"""
Application Configuration - Pydantic Settings for type-safe config.

NO DICTIONARIES - All configuration is strongly typed.
FAIL FAST - Invalid config is rejected at import time.
"""

import logging
import sys

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when critical configuration is missing or invalid."""

    pass


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # App Store verifyReceipt
    apple_shared_secret: str = ""  # App-specific shared secret from App Store Connect
    verify_receipt_timeout_seconds: float = 5.0  # Deadline for each environment attempt
    exclude_old_transactions: bool | None = None  # Default when a call does not say

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # json or console

    # Observability - Metrics
    metrics_enabled: bool = True

    # Observability - Tracing
    tracing_enabled: bool = False
    otlp_endpoint: str = "http://otel-collector:4317"
    otlp_insecure: bool = True
    service_name: str = "app-store-receipt-validation"
    service_version: str = "0.1.0"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_critical_config(self) -> "Settings":
        """FAIL FAST: reject settings the validator cannot run with."""
        errors: list[str] = []

        if self.verify_receipt_timeout_seconds <= 0:
            errors.append(
                "VERIFY_RECEIPT_TIMEOUT_SECONDS must be positive, "
                f"got: {self.verify_receipt_timeout_seconds}"
            )
        if self.log_format not in ("json", "console"):
            errors.append(f"LOG_FORMAT must be 'json' or 'console', got: {self.log_format}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            errors.append(f"LOG_LEVEL is not a logging level: {self.log_level}")

        if errors:
            error_msg = "\n".join(
                [
                    "",
                    "=" * 60,
                    "CONFIGURATION ERROR",
                    "=" * 60,
                    *[f"  ✗ {e}" for e in errors],
                    "=" * 60,
                    "",
                ]
            )
            print(error_msg, file=sys.stderr)
            raise ConfigurationError(error_msg)

        return self


# Global settings instance - validates at import time
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance."""
    return settings
