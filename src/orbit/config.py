"""Application configuration contract."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TRUE_VALUES = frozenset({"1", "true", "on", "yes", "enabled"})


def env_flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = Field(alias="LOG_LEVEL", default="WARNING")
    log_json: bool = Field(alias="LOG_JSON", default=False)
    default_depth: int = Field(alias="ORBIT_DEFAULT_DEPTH", default=4, ge=0)
    feature_progress: bool = Field(alias="ORBIT_FEATURE_PROGRESS", default=False)
    feature_dry_run: bool = Field(alias="ORBIT_FEATURE_DRY_RUN", default=False)

    @field_validator("log_json", "feature_progress", "feature_dry_run", mode="before")
    @classmethod
    def _parse_flag(cls, value: object) -> bool:
        return env_flag(value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
