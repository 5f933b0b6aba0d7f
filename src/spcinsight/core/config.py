"""Centralized analysis settings using pydantic-settings.

All environment variable reads are consolidated here. Import `get_settings`
from this module rather than reading os.environ directly.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from spcinsight.utils.statistics import DEFAULT_ZERO_SIGMA_EPSILON


class Settings(BaseSettings):
    """Analysis settings loaded from environment variables.

    All env vars are prefixed with SPCINSIGHT_ (case-insensitive).
    """

    model_config = SettingsConfigDict(
        env_prefix="SPCINSIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Subgrouping
    default_sample_size: int = Field(default=5, ge=1, le=5)

    # Substituted for a zero sigma estimate before capability division
    zero_sigma_epsilon: float = Field(default=DEFAULT_ZERO_SIGMA_EPSILON, gt=0)

    # Presentation rounding
    stat_decimals: int = Field(default=4, ge=0)
    index_decimals: int = Field(default=2, ge=0)
    spec_decimals: int = Field(default=3, ge=0)

    # Logging
    log_format: str = "console"
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings singleton."""
    return Settings()
