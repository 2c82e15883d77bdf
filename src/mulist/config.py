from __future__ import annotations

from pathlib import Path

from pydantic.functional_validators import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from mulist.logging_utils import LOG_LEVELS
from mulist.storage import DEFAULT_PATH


class Settings(BaseSettings):
    """
    Runtime settings.

    Read, highest priority first, from keyword arguments, `MULIST_*`
    environment variables, a `.env` file and a `mulist.yml` file in the
    working directory.
    """

    DATA_FILE: Path = DEFAULT_PATH

    LOG_LEVEL: str = "info"

    model_config = SettingsConfigDict(env_prefix="MULIST_", env_file=".env", yaml_file="mulist.yml", extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {value!r}.")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )
