from enum import StrEnum
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from metabridge.constants import DEFAULT_ALTERNATIVE_ROOTS, VOLUME_CACHE_TTL, VOLUMES_ROOT


class Backend(StrEnum):
    NATIVE = "native"
    WINE = "wine"
    PARALLELS = "parallels"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="METABRIDGE_",
        extra="ignore",
    )

    preferred_backend: Backend = Backend.WINE
    vm_name: str = "Windows 11"
    prlctl_binary: str = "prlctl"
    wine_binary: str = "wine64"
    wine_prefix: Path | None = None
    volumes_root: Path = Path(VOLUMES_ROOT)
    volume_cache_ttl: float = VOLUME_CACHE_TTL
    alternative_mount_roots: list[str] = list(DEFAULT_ALTERNATIVE_ROOTS)

    @field_validator("preferred_backend")
    @classmethod
    def _no_native_preference(cls, value: Backend) -> Backend:
        if value is Backend.NATIVE:
            raise ValueError("preferred_backend must be 'wine' or 'parallels'")
        return value

    @model_validator(mode="after")
    def _expand_prefix(self) -> "Settings":
        if self.wine_prefix is not None:
            self.wine_prefix = self.wine_prefix.expanduser()
        return self


settings = Settings()
