import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .log_monitor.patterns import ClassifierConfig

_CONFIG_PATH = os.getenv("MCSLACK_CONFIG", "config.toml")
_ENV_PATH = os.getenv("MCSLACK_ENV", ".env")


class RconSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 25575
    password: str = "minecraft"
    timeout_seconds: float = 10.0  # login and commands
    connect_timeout_seconds: float = 10.0


class SlackSettings(BaseModel):
    webhook_url: Optional[str] = None  # required by `ingest`
    token: Optional[str] = None  # required by `server`
    webhook_timeout_seconds: float = 5.0
    ignore_users: list[str] = ["slackbot"]


class IngestSettings(BaseModel):
    # Messages further than this in the past or future are discarded
    discard_tolerance_seconds: float = 60.0
    log_path: Optional[Path] = None  # read stdin when unset


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MCSLACK_",
        env_nested_delimiter="__",
        toml_file=_CONFIG_PATH,
        env_file=_ENV_PATH,
    )

    rcon: RconSettings = Field(default_factory=RconSettings)
    slack: SlackSettings = Field(default_factory=SlackSettings)
    ingest: IngestSettings = Field(default_factory=IngestSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)

    logs_dir: Path = Field(default=Path("logs"))

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Source order: init args > OS env > .env > config.toml > secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


settings = Settings()
