"""
Auth boundary configuration.

Authentication itself lives in the upstream auth service; this service only
reads the identity it forwards on trusted headers.

Dependencies: pydantic_settings
System role: Identity header configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Trusted identity header names."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    user_id_header: str = Field(
        default="X-User-ID",
        description="Header carrying the authenticated user UUID",
    )
    username_header: str = Field(
        default="X-User-Name",
        description="Header carrying the username used on first profile creation",
    )
    grade_level_header: str = Field(
        default="X-User-Grade",
        description="Header carrying the grade level used on first profile creation",
    )
