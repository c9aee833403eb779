"""Platform-appropriate default MetaEditor locations."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from metabridge.config import Settings, settings
from metabridge.constants import EDITOR_REGISTRY
from metabridge.discovery.wine import WineInfo, detect_wine
from metabridge.platform_info import PLATFORM, PlatformInfo
from metabridge.services.editor_version import inspect_editor

logger = logging.getLogger(__name__)

_WSL_MOUNT_ROOT = "/mnt/c"


@dataclass(frozen=True, slots=True)
class PlatformDefaults:
    metaeditor4: str
    metaeditor5: str

    def get(self, key: str) -> str:
        return getattr(self, key)


@dataclass(frozen=True, slots=True)
class EditorInstallation:
    key: str
    path: str
    exists: bool
    version: str | None = None
    machine: str | None = None


def _mounted_path(root: str, key: str) -> str:
    install_dir = EDITOR_REGISTRY[key]["install_dir"].replace("\\", "/")
    return f"{root}/{install_dir}/{EDITOR_REGISTRY[key]['exe_name']}"


def get_platform_defaults(
    platform: PlatformInfo = PLATFORM,
    wine_probe: Callable[[], WineInfo] | None = None,
    *,
    config: Settings = settings,
) -> PlatformDefaults:
    if platform.is_windows:
        return PlatformDefaults(
            **{
                key: f"C:\\{entry['install_dir']}\\{entry['exe_name']}"
                for key, entry in EDITOR_REGISTRY.items()
            }
        )

    if platform.is_mac:
        wine = wine_probe() if wine_probe else detect_wine(platform, config.wine_prefix)
        if wine.has_prefix:
            return PlatformDefaults(
                metaeditor4=str(
                    wine.metaeditor4_path / EDITOR_REGISTRY["metaeditor4"]["wine_exe_name"]
                ),
                metaeditor5=str(
                    wine.metaeditor5_path / EDITOR_REGISTRY["metaeditor5"]["wine_exe_name"]
                ),
            )
        root = f"{config.volumes_root.as_posix().rstrip('/')}/C"
    else:
        root = _WSL_MOUNT_ROOT

    return PlatformDefaults(**{key: _mounted_path(root, key) for key in EDITOR_REGISTRY})


def detect_installations(
    platform: PlatformInfo = PLATFORM,
    wine_probe: Callable[[], WineInfo] | None = None,
    *,
    config: Settings = settings,
) -> list[EditorInstallation]:
    """Report each default MetaEditor location with its PE version and CPU when present."""
    defaults = get_platform_defaults(platform, wine_probe, config=config)
    installs: list[EditorInstallation] = []
    for key in EDITOR_REGISTRY:
        path = defaults.get(key)
        exists = os.path.isfile(path)
        binary = inspect_editor(path) if exists else None
        version = binary.version if binary else None
        machine = binary.machine if binary else None
        if exists:
            logger.info(
                "Found %s at %s (version %s, %s)",
                key,
                path,
                version or "unknown",
                machine or "unknown cpu",
            )
        installs.append(
            EditorInstallation(
                key=key, path=path, exists=exists, version=version, machine=machine
            )
        )
    return installs
