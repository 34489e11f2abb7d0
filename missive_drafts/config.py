"""
Configuration Management
========================

Centralized configuration using Pydantic Settings with validation,
environment variable loading, and type safety.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment enumeration."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class MissiveSettings(BaseSettings):
    """Missive public API configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="MISSIVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    api_token: str = Field(
        default="",
        description="Bearer token used when a request carries none"
    )
    base_url: str = Field(
        default="https://public.missiveapp.com",
        description="Base URL of the Missive public API"
    )
    drafts_path: str = Field(
        default="/v1/drafts",
        description="Endpoint for draft creation"
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds, None waits indefinitely"
    )
    
    @property
    def drafts_url(self) -> str:
        """Get full drafts endpoint URL."""
        return f"{self.base_url.rstrip('/')}{self.drafts_path}"


class AppSettings(BaseSettings):
    """Main application settings."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False
    )
    
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current environment"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Server port"
    )
    
    missive: MissiveSettings = Field(default_factory=MissiveSettings)
    
    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> Environment:
        """Validate and convert environment string to enum."""
        if isinstance(v, Environment):
            return v
        return Environment(v.lower())
    
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get cached application settings.
    
    Returns:
        AppSettings: The application settings instance.
    """
    return AppSettings()
