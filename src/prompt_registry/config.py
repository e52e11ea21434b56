"""
Configuration management using Pydantic Settings.

This module handles all environment-based configuration for the Prompt Registry,
including the template source location, logging and the HTTP API.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Prompt library shipped inside the package
BUNDLED_PROMPTS_DIR = Path(__file__).parent / "prompts"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env file.

    Every field has a default, so the service starts against the bundled
    prompt library with no configuration at all.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_title: str = Field(default="Prompt Registry", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")

    # Environment
    environment: str = Field(
        default="development",
        description="Deployment environment",
        pattern="^(development|staging|production|test)$",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="json",
        description="Logging format",
        pattern="^(json|standard)$",
    )

    # Template Source
    templates_dir: Path = Field(
        default=BUNDLED_PROMPTS_DIR,
        description="Directory scanned for prompt template files at startup",
    )
    template_patterns: list[str] = Field(
        default=["*.prompt.md"],
        description="Glob patterns selecting template files inside templates_dir",
        min_length=1,
    )
    templates_recursive: bool = Field(
        default=False,
        description="Also scan subdirectories of templates_dir",
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=False,  # Must be False when using wildcard
        description="Allow CORS credentials",
    )
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        description="Allowed CORS methods",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "X-Request-ID"],
        description="Allowed CORS headers",
    )

