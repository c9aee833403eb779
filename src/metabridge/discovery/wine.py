"""Probe the MetaQuotes Wine prefix and the MetaTrader installs inside it."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from metabridge.constants import (
    EDITOR_REGISTRY,
    WINE_PREFIX_LINUX,
    WINE_PREFIX_MAC,
    WINE_PROGRAM_FILES,
)
from metabridge.platform_info import PlatformInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WineInfo:
    has_prefix: bool
    has_metaeditor4: bool
    has_metaeditor5: bool
    prefix_path: Path
    metaeditor4_path: Path
    metaeditor5_path: Path


def default_wine_prefix(platform: PlatformInfo) -> Path:
    if platform.is_mac:
        return platform.home / WINE_PREFIX_MAC
    return platform.home / WINE_PREFIX_LINUX


def _is_dir(path: Path) -> bool:
    try:
        return os.path.isdir(path)
    except OSError:
        logger.debug("Existence check failed for %s", path, exc_info=True)
        return False


def detect_wine(platform: PlatformInfo, prefix: Path | None = None) -> WineInfo:
    """Check the prefix and each MetaTrader folder independently."""
    prefix_path = prefix if prefix is not None else default_wine_prefix(platform)
    program_files = prefix_path / WINE_PROGRAM_FILES
    mt4 = program_files / EDITOR_REGISTRY["metaeditor4"]["wine_dir"]
    mt5 = program_files / EDITOR_REGISTRY["metaeditor5"]["wine_dir"]
    return WineInfo(
        has_prefix=_is_dir(prefix_path),
        has_metaeditor4=_is_dir(mt4),
        has_metaeditor5=_is_dir(mt5),
        prefix_path=prefix_path,
        metaeditor4_path=mt4,
        metaeditor5_path=mt5,
    )
