"""
Storefront Backend - Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.

Hosting note:
    Platforms such as Render inject the listen port as `PORT`; the field is
    named `port` so that variable is picked up without any mapping.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    Attributes are grouped by concern for readability.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")

    # What: The single listen port for the HTTP server
    port: int = Field(default=8080, ge=1, le=65535)

    # ── Catalog ───────────────────────────────────────────────────────────
    # What: Public origin prepended to every product URL
    # Format: scheme://host[:port], no trailing path (a trailing "/" is stripped)
    public_base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL used to build product image URLs",
    )

    # What: Directory holding one sub-folder per category; also served under /images/
    images_root: str = Field(default="./images")

    # What: Category folder names exposed through alias routes (/api/<lowercase name>)
    # Format: Comma-separated folder names, case preserved
    catalog_categories: str = Field(
        default="Keychains,Stickers,PocketWatch,Bracelet,Lockets,Posters,Anime,Polaroids,Albums"
    )

    @property
    def catalog_categories_list(self) -> List[str]:
        """Splits comma-separated category folder names into a list."""
        return [c.strip() for c in self.catalog_categories.split(",") if c.strip()]

    # ── Orders ────────────────────────────────────────────────────────────
    # What: Requester name that sees every order, hidden ones included
    # Note: A naming convention, not authentication
    admin_username: str = Field(default="admin", min_length=1)

    # ── CORS ──────────────────────────────────────────────────────────────
    # What: Allowed origins for cross-origin requests ("*" = any origin)
    # Format: Comma-separated URLs
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
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

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # PORT and port both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
