"""Application settings and configuration management."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = Field(default="Fashion Catalogue Search")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)

    # Dataset
    products_path: Optional[str] = Field(default=None)  # bundled sample when unset

    # Search Configuration
    fuzzy_threshold: float = Field(default=0.8)
    suggestion_threshold: float = Field(default=0.7)
    min_fuzzy_length: int = Field(default=3)
    max_suggestions: int = Field(default=5)
    suggestion_result_limit: int = Field(default=0)
    max_query_length: int = Field(default=200)
    skip_fuzzy_on_exact: bool = Field(default=False)

    # Scoring weights
    weight_title_exact: float = Field(default=3.0)
    weight_title_fuzzy: float = Field(default=2.0)
    weight_description_exact: float = Field(default=1.0)
    weight_description_fuzzy: float = Field(default=0.5)
    weight_title_phrase: float = Field(default=1.0)
    weight_description_phrase: float = Field(default=0.5)
    weight_coverage: float = Field(default=2.0)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
