"""Discovery of Parallels mounts and the MetaQuotes Wine prefix."""

from metabridge.discovery.mounts import ParallelsMounts, find_parallels_mounts
from metabridge.discovery.volumes import VolumeCache, get_volume_cache
from metabridge.discovery.wine import WineInfo, default_wine_prefix, detect_wine

__all__ = [
    "ParallelsMounts",
    "VolumeCache",
    "WineInfo",
    "default_wine_prefix",
    "detect_wine",
    "find_parallels_mounts",
    "get_volume_cache",
]
