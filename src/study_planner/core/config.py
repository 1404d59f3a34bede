"""Application settings powered by ``pydantic-settings``."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any, Literal, Sequence

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .. import __version__ as package_version

EnvironmentName = Literal["development", "test", "ci"]
CommaSeparated = Annotated[list[str], NoDecode]

_ENVIRONMENT_ALIASES: dict[str, EnvironmentName] = {
    "development": "development",
    "dev": "development",
    "local": "development",
    "test": "test",
    "testing": "test",
    "ci": "ci",
}

_ENVIRONMENT_PROFILES: dict[EnvironmentName, dict[str, Any]] = {
    "development": {
        "log_level": "DEBUG",
        "reload": True,
    },
    "test": {
        "log_level": "WARNING",
        "reload": False,
    },
    "ci": {
        "log_level": "INFO",
        "reload": False,
    },
}


class Settings(BaseSettings):
    """Runtime configuration for the study planner service."""

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "Study Planner"
    environment: EnvironmentName = "development"
    api_prefix: str = "/api"
    version: str = package_version
    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "study_planner"
    cors_allow_origins: CommaSeparated = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: CommaSeparated = Field(default_factory=lambda: ["*"])
    cors_allow_headers: CommaSeparated = Field(default_factory=lambda: ["*"])
    app_host: str = "0.0.0.0"
    app_port: int = 5000
    log_level: str = "INFO"
    reload: bool = True

    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60, ge=1)

    leaderboard_size: int = 10
    completion_compensate: bool = Field(
        default=False,
        description="Revert a completion flip when the XP credit that follows it fails.",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def _normalise_environment(cls, value: object) -> EnvironmentName:
        key = value.strip().lower() if isinstance(value, str) else ""
        return _ENVIRONMENT_ALIASES.get(key, "development")

    @field_validator(
        "cors_allow_origins",
        "cors_allow_methods",
        "cors_allow_headers",
        mode="before",
    )
    @classmethod
    def _coerce_comma_separated(cls, value: object) -> list[str]:
        """Allow comma separated strings for CORS configuration."""

        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Sequence):
            return [str(item) for item in value if str(item).strip()]
        return []

    @field_validator("leaderboard_size", mode="before")
    @classmethod
    def _ensure_positive_leaderboard(cls, value: object) -> int:
        try:
            size = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 10
        return max(size, 1)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        if not isinstance(value, str):
            return "INFO"
        return value.upper()

    @model_validator(mode="after")
    def _apply_environment_profile(self) -> "Settings":
        profile = _ENVIRONMENT_PROFILES[self.environment]
        fields_set = set(getattr(self, "model_fields_set", set()))
        for field_name, value in profile.items():
            if field_name not in fields_set:
                setattr(self, field_name, value)
        return self


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings()
