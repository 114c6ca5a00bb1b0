"""Runtime settings, read from the environment and an optional ``.env``."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Where the SQLite database and logs live unless overridden.
    # When installed in editable mode the project root is the repo root.
    DATA_ROOT: Path = Field(
        default=(Path(__file__).resolve().parents[3] / "data"),
        validation_alias=AliasChoices("STOREFRONT_DATA_ROOT", "DATA_ROOT"),
    )

    # Any SQLAlchemy URL; PostgreSQL in production, SQLite by default.
    DB_URL: str | None = Field(
        default=None,
        validation_alias=AliasChoices("STOREFRONT_DB_URL", "DB_URL"),
    )
    DB_ECHO: bool = Field(
        default=False,
        validation_alias=AliasChoices("STOREFRONT_DB_ECHO", "DB_ECHO"),
    )

    # Percentage applied to subtotal + shipping.
    VAT_RATE: Decimal = Field(
        default=Decimal("15"),
        ge=0,
        validation_alias=AliasChoices("STOREFRONT_VAT_RATE", "VAT_RATE"),
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias=AliasChoices("STOREFRONT_LOG_LEVEL", "LOG_LEVEL"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        return f"sqlite:///{(self.DATA_ROOT / 'storefront.db').as_posix()}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
