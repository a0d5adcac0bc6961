"""
Echo Server Backend: Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Environment variables (case-insensitive):
    PORT                  Listening port (default 3000)
    HOST                  Bind address (default 0.0.0.0)
    LOG_LEVEL             DEBUG, INFO, WARNING, ERROR or CRITICAL
    REMOVED_HEADERS       Comma-separated response headers to strip
    STRIP_TRAILING_SLASH  Normalise "/api/echo/" to "/api/echo" before routing
    ENABLE_DOCS           Serve /docs, /redoc and /openapi.json
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults, so the server starts with no environment at all.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Response Headers ──────────────────────────────────────────────────
    # Format: comma-separated header names (parsed by the property below)
    removed_headers: str = Field(default="X-Powered-By,Server")

    @property
    def removed_headers_list(self) -> List[str]:
        """Splits comma-separated header names into a list, skipping blanks."""
        return [name.strip() for name in self.removed_headers.split(",") if name.strip()]

    # ── Routing ───────────────────────────────────────────────────────────
    strip_trailing_slash: bool = Field(default=False)

    # Off by default: the docs pages would otherwise be reachable paths
    # and stop answering 404.
    enable_docs: bool = Field(default=False)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # PORT and port both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
