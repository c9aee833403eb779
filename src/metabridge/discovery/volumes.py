"""Time-bounded cache of the mounted-volume listing.

Path translation reads ``/Volumes`` on every call, so the listing is kept for
a short TTL instead of hitting the filesystem each time.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from collections.abc import Callable
from pathlib import Path

from metabridge.config import settings

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Lister = Callable[[Path], list[str]]


def _list_dir(root: Path) -> list[str]:
    return sorted(os.listdir(root))


class VolumeCache:
    def __init__(
        self,
        root: str | Path,
        ttl: float,
        *,
        clock: Clock = time.monotonic,
        lister: Lister = _list_dir,
    ) -> None:
        self._root = Path(root)
        self._ttl = ttl
        self._clock = clock
        self._lister = lister
        self._volumes: list[str] = []
        self._refreshed_at: float | None = None
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    def get(self, now: float | None = None) -> list[str]:
        """Return the cached listing, refreshing it once the TTL has elapsed."""
        if now is None:
            now = self._clock()
        with self._lock:
            if self._refreshed_at is not None and now - self._refreshed_at < self._ttl:
                return list(self._volumes)
            try:
                self._volumes = list(self._lister(self._root))
                self._refreshed_at = now
            except OSError:
                logger.debug("Could not list volumes under %s", self._root, exc_info=True)
                self._volumes = []
                self._refreshed_at = None
            return list(self._volumes)

    def invalidate(self) -> None:
        with self._lock:
            self._refreshed_at = None


_default_cache: VolumeCache | None = None
_default_lock = threading.Lock()


def get_volume_cache() -> VolumeCache:
    """Return the process-wide cache, creating it from settings on first use."""
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            _default_cache = VolumeCache(settings.volumes_root, settings.volume_cache_ttl)
        return _default_cache
