"""Path conversion between MetaEditor's Windows paths and the host filesystem.

MetaEditor settings store Windows paths (``C:\\MT5_Install\\MetaTrader\\...``).
On macOS the guest drives are reachable through Parallels shared volumes
(``/Volumes/[C] Windows 11/...``) or through the MetaQuotes Wine prefix
(``~/Library/Application Support/net.metaquotes.wine.metatrader5/drive_c/...``).

Every conversion is best effort: volume names are not a stable contract, so a
returned path may not exist and callers must cope with that.
"""

from __future__ import annotations

import functools
import logging
import os
import re
from collections.abc import Callable, Sequence

from metabridge.config import Settings, settings
from metabridge.constants import PARALLELS_HOME_SHARE, WINE_DRIVE_C, WINE_DRIVE_D
from metabridge.discovery.mounts import ParallelsMounts, find_parallels_mounts
from metabridge.discovery.volumes import VolumeCache, get_volume_cache
from metabridge.discovery.wine import WineInfo, detect_wine
from metabridge.platform_info import PLATFORM, PlatformInfo

logger = logging.getLogger(__name__)

# (converted_path, volumes_root, home) -> candidate or None
CandidateGenerator = Callable[[str, str, str], str | None]

_DRIVE_RE = re.compile(r"^([A-Za-z]):[\\/]")
_HOME_SHARE_RE = re.compile(r"^//Mac/Home(?=/|$)", re.IGNORECASE)
_MULTI_SLASH_RE = re.compile(r"/{2,}")


def collapse_separators(path: str) -> str:
    """Collapse doubled ``/`` but keep a leading ``//`` (UNC-style share)."""
    if path.startswith("//"):
        return "//" + _MULTI_SLASH_RE.sub("/", path[2:].lstrip("/"))
    return _MULTI_SLASH_RE.sub("/", path)


def under_root(root: str) -> CandidateGenerator:
    """Candidate that re-roots the path from the volumes root onto *root*."""
    root = root.rstrip("/")

    def candidate(path: str, volumes_root: str, _home: str) -> str | None:
        if not path.startswith(volumes_root + "/"):
            return None
        return root + path[len(volumes_root) :]

    return candidate


def in_home_parallels(path: str, _volumes_root: str, home: str) -> str | None:
    name = path.rstrip("/").rsplit("/", 1)[-1]
    if not name:
        return None
    return f"{home.rstrip('/')}/Parallels/{name}"


def default_alternatives(roots: Sequence[str]) -> list[CandidateGenerator]:
    return [*(under_root(r) for r in roots), in_home_parallels]


class PathTranslator:
    def __init__(
        self,
        platform: PlatformInfo = PLATFORM,
        *,
        config: Settings = settings,
        volumes: VolumeCache | None = None,
        exists: Callable[[str], bool] = os.path.exists,
        alternatives: Sequence[CandidateGenerator] | None = None,
        wine_probe: Callable[[], WineInfo] | None = None,
    ) -> None:
        self._platform = platform
        self._volumes = volumes if volumes is not None else get_volume_cache()
        self._exists = exists
        self._alternatives = list(
            alternatives
            if alternatives is not None
            else default_alternatives(config.alternative_mount_roots)
        )
        self._wine_probe = wine_probe or (lambda: detect_wine(platform, config.wine_prefix))

    @property
    def volumes_root(self) -> str:
        return self._volumes.root.as_posix().rstrip("/")

    @property
    def home(self) -> str:
        return self._platform.home.as_posix().rstrip("/")

    def mounts(self) -> ParallelsMounts:
        return find_parallels_mounts(self._volumes.get(), self.volumes_root)

    def to_host_path(self, windows_path: str) -> str:
        if not windows_path or self._platform.is_windows:
            return windows_path

        host_path = windows_path
        m = _DRIVE_RE.match(windows_path)
        if m:
            letter = m.group(1).upper()
            mount = self.mounts().for_letter(letter)
            rest = windows_path[m.end() :]
            if mount:
                host_path = f"{mount}/{rest}"
            else:
                host_path = f"{self.volumes_root}/{letter}/{rest}"

        host_path = collapse_separators(host_path.replace("\\", "/"))
        home = self.home
        host_path = _HOME_SHARE_RE.sub(lambda _m: home, host_path)

        if not self._exists(host_path) and host_path.startswith(self.volumes_root + "/"):
            for candidate in self._candidates(host_path):
                if self._exists(candidate):
                    logger.debug("Using alternative path %s for %s", candidate, windows_path)
                    return candidate
        return host_path

    def _candidates(self, host_path: str):
        for generate in self._alternatives:
            candidate = generate(host_path, self.volumes_root, self.home)
            if candidate:
                yield candidate

    def to_windows_path(self, host_path: str) -> str:
        if not host_path or self._platform.is_windows:
            return host_path

        windows_path = host_path
        for letter, mount in self.mounts().items():
            if _is_under(windows_path, mount, ignore_case=True):
                windows_path = f"{letter}:\\" + windows_path[len(mount) + 1 :]
                break
        else:
            m = re.match(rf"^{re.escape(self.volumes_root)}/([A-Za-z])(?:/|$)", windows_path)
            if m:
                windows_path = f"{m.group(1).upper()}:\\" + windows_path[m.end() :]

        home = self.home
        if home and _is_under(windows_path, home):
            windows_path = PARALLELS_HOME_SHARE + windows_path[len(home) :]

        return windows_path.replace("/", "\\")

    def to_wine_path(self, windows_path: str, wine: WineInfo | None = None) -> str:
        if not windows_path or self._platform.is_windows:
            return windows_path

        info = wine if wine is not None else self._wine_probe()
        if not info.has_prefix:
            return windows_path

        wine_path = windows_path
        m = _DRIVE_RE.match(windows_path)
        if m and m.group(1).upper() in ("C", "D"):
            drive_dir = WINE_DRIVE_C if m.group(1).upper() == "C" else WINE_DRIVE_D
            prefix = info.prefix_path.as_posix().rstrip("/")
            wine_path = f"{prefix}/{drive_dir}/{windows_path[m.end() :]}"
        return collapse_separators(wine_path.replace("\\", "/"))


def _is_under(path: str, root: str, *, ignore_case: bool = False) -> bool:
    if ignore_case:
        path, root = path.lower(), root.lower()
    return path == root or path.startswith(root + "/")


@functools.cache
def get_translator() -> PathTranslator:
    return PathTranslator()


def to_host_path(windows_path: str) -> str:
    return get_translator().to_host_path(windows_path)


def to_windows_path(host_path: str) -> str:
    return get_translator().to_windows_path(host_path)


def to_wine_path(windows_path: str) -> str:
    return get_translator().to_wine_path(windows_path)
