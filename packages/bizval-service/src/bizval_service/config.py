"""
Runtime settings, read from ``BIZVAL_*`` environment variables (or a ``.env`` file).
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field("INFO", description="Root logging level for the service")
    listings_csv: Optional[str] = Field(None, description="Path of the listings CSV served by the 'csv' connector")
    default_source: str = Field("csv", description="Connector used when a request names no source")

    model_config = SettingsConfigDict(
        env_prefix="BIZVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
