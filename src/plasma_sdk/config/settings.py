"""SDK settings and logging setup."""
import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """SDK settings loaded from environment variables."""

    # Best trade search defaults
    max_num_results: int = Field(
        default=3,
        description="Maximum number of trades returned by a best trade search",
        alias="PLASMA_MAX_NUM_RESULTS",
        ge=1
    )

    max_hops: int = Field(
        default=3,
        description="Maximum number of pairs a searched trade may route through",
        alias="PLASMA_MAX_HOPS",
        ge=1
    )

    search_max_workers: int = Field(
        default=1,
        description="Threads used to explore first-hop branches; 1 searches inline",
        alias="PLASMA_SEARCH_MAX_WORKERS",
        ge=1
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level applied by configure_logging",
        alias="PLASMA_LOG_LEVEL"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore"  # Ignore extra fields from .env
    }


# Global settings instance
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Set the level of the plasma_sdk logger from level or settings.log_level."""
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.getLogger("plasma_sdk").setLevel(log_level)
