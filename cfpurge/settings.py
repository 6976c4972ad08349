from typing import Tuple, Type

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .zone import Zone

BASE_URL = "https://api.cloudflare.com/client/v4/"


class LogSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="log_", extra="ignore")

    level: str = "info"
    colors: bool = True


class CloudflareSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="cloudflare_", extra="ignore")

    # API token, preferred over the legacy global key
    token: str | None = None
    email: str | None = None
    key: str | None = None

    base_url: str = BASE_URL
    timeout: float | None = 30.0

    @model_validator(mode="after")
    def _check_credentials(self) -> "CloudflareSettings":
        if not self.token and not (self.email and self.key):
            raise ValueError("Cloudflare credentials missing: set a token, or both email and key")
        return self


class ZoneConfig(BaseModel):
    files: list[str] | None = None
    tags: list[str] | None = None
    hosts: list[str] | None = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    log: LogSettings = Field(default_factory=LogSettings)
    cloudflare: CloudflareSettings = Field(default_factory=CloudflareSettings)  # type: ignore


class Config(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    settings: Settings = Field(default_factory=Settings)
    zones: dict[str, ZoneConfig | None] | None = Field(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            YamlConfigSettingsSource(settings_cls),
            env_settings,
            dotenv_settings,
        )

    def zone_descriptors(self) -> dict[str, Zone]:
        """Configured zones in file order, empty filters dropped."""
        return {
            identifier: Zone.from_config(zone.model_dump() if zone is not None else None)
            for identifier, zone in (self.zones or {}).items()
        }


def load_config(path: str) -> Config:
    Config.model_config["yaml_file"] = path
    return Config()
