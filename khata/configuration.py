"""Mini README: Centralised configuration model and accessor for Khata.

Structure:
    * KhataSettings - Pydantic settings describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Values come from ``KHATA_``-prefixed environment variables or a local
    ``.env`` file. ``get_settings`` caches the validated model so every module
    sees the same configuration; tests build ``KhataSettings`` directly and
    pass it to the application factory instead.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class KhataSettings(BaseSettings):
    """Runtime configuration for the ledger service."""

    environment: str = Field(
        "development",
        description="Environment label reported by the health check and used for log levels.",
    )
    database_url: str = Field(
        "sqlite:///khata.db",
        description="SQLAlchemy URL of the ledger database.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        3000,
        description="Port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    recent_transactions_limit: int = Field(
        50,
        description="Default number of transactions returned by the recent list.",
        ge=1,
        le=1000,
    )
    log_level: str = Field("INFO", description="Root logging level.")

    class Config:
        env_prefix = "KHATA_"
        env_file = ".env"
        case_sensitive = False

    @validator("environment", pre=True)
    def _normalise_environment(cls, value: object) -> str:
        """Lower-case the environment label so comparisons stay simple."""

        return str(value or "development").strip().lower()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> KhataSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return KhataSettings()
