"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from study_helper.domain.study.services.subject_ordering import SubjectSortOrder


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    DATABASE_URL: str = "sqlite:///study.db"

    # Remote question bank
    STUDY_API_BASE_URL: str = "https://wp.zybooks.com/study-helper.php"
    REQUEST_TIMEOUT: float = 30.0

    # Saved subject list order: "alpha", "new_first" or "old_first"
    SUBJECT_ORDER: str = SubjectSortOrder.ALPHABETIC.value

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    @field_validator("STUDY_API_BASE_URL", mode="after")
    @classmethod
    def strip_base_url(cls, value: str) -> str:
        """Strip whitespace from the API base URL."""
        return value.strip()

    @property
    def subject_sort_order(self) -> SubjectSortOrder:
        """Saved subject order preference as an enum."""
        return SubjectSortOrder.from_preference(self.SUBJECT_ORDER)


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
