"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="UIPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Caching
    enable_cache: bool = Field(default=True, description="Enable plan caching")
    cache_size: int = Field(default=100, gt=0, description="Cache max size")
    cache_ttl: int = Field(default=3600, gt=0, description="Cache TTL (seconds)")

    # Validation
    max_request_length: int = Field(default=10_000, gt=0, description="Max request length")
    max_response_size: int = Field(
        default=512 * 1024, gt=0, description="Max completion size accepted by the parser (bytes)"
    )

    # Generation
    import_path: str = Field(
        default="@/components/lib", description="Module generated code imports components from"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
