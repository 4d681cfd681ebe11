"""Application configuration."""

import os
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("~/.macro_planner").expanduser()
    storage_namespace: str = "macroPlanner"
    timezone: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 200
    openai_temperature: float = 0.3
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="MACRO_PLANNER_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_timezone(raw: str | None) -> ZoneInfo | None:
    """Parse an IANA timezone name; blank means the system local timezone."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    return ZoneInfo(cleaned)
