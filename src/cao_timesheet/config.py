"""Configuration management for the timesheet engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    engine_version: str
    default_company_name: str
    default_vacation_days: int
    break_schedule_on: bool
    log_level: str

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            engine_version=os.getenv("ENGINE_VERSION", "1.0.0"),
            default_company_name=os.getenv("DEFAULT_COMPANY_NAME", "Unknown Company"),
            default_vacation_days=int(os.getenv("DEFAULT_VACATION_DAYS", "25")),
            break_schedule_on=os.getenv("BREAK_SCHEDULE", "true").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
