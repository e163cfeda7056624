"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Engine settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # History
    history_depth: int = Field(default=50, gt=0, description="Committed documents kept for undo/redo")

    # Submission queue
    max_queue_depth: int = Field(
        default=16, ge=0, description="Submissions allowed to wait behind the active cycle"
    )

    # Sanitization
    max_string_length: int = Field(default=10_000, gt=0, description="Max length of a prop string")
    max_prop_depth: int = Field(default=10, gt=0, description="Max nesting depth of prop values")

    # Candidate parsing
    max_candidate_size: int = Field(
        default=512 * 1024, gt=0, description="Max size of raw candidate text (bytes)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
