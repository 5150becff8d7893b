"""
Incremental Merkle Accumulator - Configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Accumulator settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    # Application
    APP_NAME: str = "Incremental Merkle Accumulator"
    VERSION: str = "1.0.0"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Tree defaults used by IncrementalMerkleTree.from_settings()
    TREE_DEPTH: int = Field(default=32, ge=1, le=63)
    HASH_FUNCTION: str = "sha256"

    # Metrics
    METRICS_ENABLED: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
