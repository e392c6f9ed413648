"""
Practice configuration settings.

Session sizes, candidate pool caps and retry limits used by the
practice, test and import use cases.

Dependencies: pydantic_settings
System role: Tunables for question selection and progress persistence
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PracticeSettings(BaseSettings):
    """Practice session configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PRACTICE_",
        case_sensitive=False,
        extra="ignore",
    )

    adaptive_session_size: int = Field(
        default=10,
        description="Questions selected for an adaptive session",
    )
    adaptive_candidate_pool: int = Field(
        default=100,
        description="Maximum candidate questions fetched before adaptive scoring",
    )
    standard_session_size: int = Field(
        default=10,
        description="Questions fetched for a standard practice session",
    )
    max_attempts_per_question: int = Field(
        default=2,
        description="Answer attempts allowed before the answer is revealed",
    )
    test_candidate_cap: int = Field(
        default=100,
        description="Upper bound on candidates fetched when assembling a test",
    )
    import_batch_size: int = Field(
        default=100,
        description="Rows inserted per batch during question import",
    )
    progress_save_retries: int = Field(
        default=5,
        description="Retries after the first progress save hits a unique conflict",
    )
