"""Runtime settings loaded from the environment and an optional .env file."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    user_agent: str = "Mozilla/5.0 (compatible; kata-scraper/0.1; +https://www.codewars.com)"
    request_timeout: float = Field(default=30.0, gt=0)

    # Extraction pool
    concurrency: int = Field(default=10, ge=1)
    batch_size: int = Field(default=5, ge=1)
    navigation_timeout: float = Field(default=60.0, gt=0)
    selector_timeout: float = Field(default=30.0, gt=0)
    page_timeout: float = Field(default=15.0, gt=0)
    headless: bool = True
    collect_between_batches: bool = True

    log_level: str = "INFO"
    log_file: str | None = None
    log_rotation: str = "10 MB"
    log_retention: int = Field(default=5, ge=1)
    log_extraction_steps: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="KATA_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
