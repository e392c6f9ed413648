"""
Shared service settings.

Fields every MathPrep process reads regardless of concern: how the
service names itself, where it runs, how loudly it logs and which
browser origins may call it. The aggregate Settings extends this one
and nests the per-concern classes.

Dependencies: pydantic_settings
System role: Root of the settings hierarchy
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Process-wide MathPrep settings read from MATHPREP_* variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MATHPREP_",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = Field(default="mathprep-api", description="Name reported by health checks")
    environment: str = Field(default="development", description="Deployment stage, logged at startup")
    log_level: str = Field(default="INFO", description="Root logging level name")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser",
    )
