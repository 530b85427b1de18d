"""Project configuration loaded from environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import OUTPUT_FORMATS
from .exceptions import ConfigurationError

CREDENTIAL_FIELDS = ("twilio_account_sid", "twilio_auth_token")


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(case_sensitive=False)

    twilio_account_sid: str
    twilio_auth_token: str
    lookup_region: str = "US"
    lookup_timeout: Optional[float] = None
    strict_region: bool = False
    worker_count: int = 1
    output_format: str = "E164"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    log_file: str | None = None
    log_json: bool = False
    log_max_bytes: int = 1048576
    log_backup_count: int = 3

    @field_validator("output_format", "lookup_region", mode="before")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("output_format")
    @classmethod
    def _check_format(cls, v: str) -> str:
        if v not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
        return v

    @field_validator("worker_count")
    @classmethod
    def _check_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("worker_count must be at least 1")
        return v


def load_settings() -> Settings:
    """Build settings from the environment.

    Raises ``ConfigurationError`` naming each offending variable.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        problems = []
        for error in exc.errors():
            name = str(error["loc"][0]).upper() if error["loc"] else "settings"
            if error["type"] == "missing":
                problems.append(f"{name} environment variable is required")
            else:
                problems.append(f"{name}: {error['msg']}")
        raise ConfigurationError("; ".join(problems)) from exc

    empty = [name.upper() for name in CREDENTIAL_FIELDS if not getattr(settings, name)]
    if empty:
        raise ConfigurationError(f"{' and '.join(empty)} must not be empty")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return load_settings()
