"""Application settings and configuration."""

import logging
from functools import lru_cache
from typing import Annotated, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Character builder settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="BAG_OF_TRICKS_",
        extra="ignore",
    )

    # Application
    app_name: Annotated[str, Field(default="Bag of Tricks")]

    # Logging
    log_level: Annotated[str, Field(default="INFO")]
    log_file: Annotated[Optional[str], Field(default=None)]

    # Random source. None seeds from system entropy.
    seed: Annotated[Optional[int], Field(default=None)]

    # Resolver
    max_resolution_depth: Annotated[int, Field(default=16, ge=1, le=256)]
    composite_duplicates: Annotated[Literal["exclude", "permit"], Field(default="exclude")]

    # Language weighting
    standard_language_weight: Annotated[float, Field(default=2.0, gt=0)]
    exotic_language_weight: Annotated[float, Field(default=1.0, gt=0)]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the log level name."""
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
