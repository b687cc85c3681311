"""
Mock Device Server - Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, middleware and response generators.
When:  Loaded once at module import time.

None of these values are part of the HTTP contract; they only exist so a test
bench can point the stub at another port or swap the fiscal constants printed
on receipts.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults matching the reference device fleet, so the
    server starts without any environment at all.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    # Swagger UI and the OpenAPI document; off turns the stub into a bare
    # route table.
    docs_enabled: bool = Field(default=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── CORS ──────────────────────────────────────────────────────────────
    # Seconds a browser may cache the preflight answer.
    cors_max_age: int = Field(default=86400, ge=0)

    # ── Fiscal constants (printed on every receipt) ───────────────────────
    fn_number: str = Field(default="9960440300757395")
    fns_url: str = Field(default="www.nalog.gov.ru")
    registration_number: str = Field(default="0004622719017597")
    shift_number: int = Field(default=116, ge=0)

    # fiscalDocumentDateTime is rendered in the fiscal storage's local time.
    fiscal_utc_offset_hours: int = Field(default=3, ge=-12, le=14)

    # ── Device identity ───────────────────────────────────────────────────
    cash_register_device_id: str = Field(default="cash-register-mock-001")
    pos_device_id: str = Field(default="POS_001")
    pos_operator: str = Field(default="mock_operator")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


settings = Settings()
