# This project was developed with assistance from AI tools.
"""
Engine configuration.

All settings read from environment variables with sensible local defaults.
Static rule tables (stage order, stage requirements, SLA limits, country
rules) live beside the code that uses them; settings only carry the knobs
that operators tune per deployment.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..enums import UserRole

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Engine settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "recruitflow"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:5173"]

    # -- SLA --
    SLA_WARNING_RATIO: float = Field(
        default=0.8,
        description="Fraction of a stage's SLA limit at which the status turns to warning.",
    )
    DEFAULT_SLA_DAYS: int = Field(
        default=7,
        description="SLA limit used for a stage missing from the SLA table.",
    )

    # -- Workflow rules --
    MIN_PROFILE_COMPLETION: int = Field(
        default=90,
        description="Profile completion percentage required before applying to jobs.",
    )
    OVERRIDE_ROLES: list[UserRole] = Field(
        default=[UserRole.ADMIN, UserRole.MANAGER],
        description="Roles allowed to force transitions and roll candidates back.",
    )

    # -- Task generation --
    STALE_APPLICATION_DAYS: int = Field(
        default=14,
        description="Days in Applied without an employer response before a follow-up task.",
    )

    # -- Country rules --
    COUNTRY_RULES_PATH: Path | None = Field(
        default=None,
        description="Optional YAML file replacing the built-in country rule table.",
    )


settings = Settings()
