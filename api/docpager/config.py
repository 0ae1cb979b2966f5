"""Configuration management for docpager."""

from functools import lru_cache
from typing import List, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application settings
    app_name: str = "sample_mflix"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # MongoDB settings
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "sample_mflix"
    mongodb_collection: str = "movies"
    server_selection_timeout_ms: int = 5000

    # Command monitoring settings
    monitor_commands: bool = True
    ignored_commands: List[str] = ["endSessions", "ping"]

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Pagination settings
    identifier_type: Literal["objectid", "int", "str"] = "objectid"
    default_page_size: int = 10
    max_page_size: int = 100


    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("default_page_size", "max_page_size", "server_selection_timeout_ms")
    @classmethod
    def validate_positive(cls, v, info):
        """Validate that sizes and timeouts are positive."""
        if v < 1:
            raise ValueError(f"{info.field_name} must be a positive integer")
        return v

    @model_validator(mode="after")
    def validate_page_sizes(self):
        """Default page size must fit under the maximum."""
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) must not exceed max_page_size ({self.max_page_size})"
            )
        return self

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "env_parse_none_str": True,
    }


@lru_cache
def get_settings() -> Settings:
    """Get application settings, built once per process."""
    return Settings()
