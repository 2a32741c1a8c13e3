from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexitrack.domain.constants import DEFAULT_DAILY_PLAN_SIZE


def config_path() -> Path:
    # Resolved at call time so tests can point HOME elsewhere
    return Path.home() / ".config/lexitrack/config.toml"


class AppConfig(BaseSettings):
    """
    Configuration model for lexitrack.
    Supports loading from:
    1. Environment variables (LEXITRACK_*)
    2. Config file (~/.config/lexitrack/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEXITRACK_",
        extra="ignore",
    )

    # Session building
    daily_plan_size: int = Field(default=DEFAULT_DAILY_PLAN_SIZE, ge=0)
    queue_limit: int | None = Field(default=None, ge=0)

    # Reject malformed input instead of coercing it
    strict: bool = False

    verbose: int = 0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        toml_file = config_path()

        if toml_file.exists():
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("verbose", mode="before")
    @classmethod
    def clamp_verbose(cls, v: Any) -> int:
        if v is None:
            return 0
        return max(0, int(v))


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/lexitrack/config.toml (if exists)
    3. Environment variables (LEXITRACK_*)
    4. cli_overrides (passed from Typer), None values ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
