"""
Configuration management for storygraph.

Loads settings from environment variables with sensible defaults.
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Plain or schema-qualified SQL table name
SQL_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # ==========================================================================
    # Asset Source
    # ==========================================================================
    asset_source: Literal["ndjson", "sql"] = "ndjson"
    assets_path: Path = Field(
        default=Path("./assets.ndjson"),
        description="Newline-delimited JSON snapshot of indexed IP assets",
    )
    database_url: str | None = Field(
        default=None, description="SQLAlchemy URL of the analytics store"
    )
    asset_table: str = "assets"
    asset_query_limit: int = Field(default=35000, ge=1)

    @field_validator("assets_path", mode="before")
    @classmethod
    def convert_to_path(cls, v: str | Path) -> Path:
        """Convert string paths to Path objects."""
        return Path(v) if isinstance(v, str) else v

    @field_validator("asset_table")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        if not SQL_IDENTIFIER.fullmatch(v):
            raise ValueError(f"asset_table is not a valid table name: {v!r}")
        return v

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
