from pathlib import Path

import pytest

from metabridge.config import Settings
from metabridge.discovery.volumes import VolumeCache
from metabridge.discovery.wine import WineInfo
from metabridge.platform_info import PlatformInfo
from metabridge.utils.paths import PathTranslator


@pytest.fixture
def home(tmp_path):
    d = tmp_path / "Users" / "trader"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def mac(home):
    return PlatformInfo(system="darwin", machine="arm64", home=home)


@pytest.fixture
def windows():
    return PlatformInfo(system="win32", machine="AMD64", home=Path("C:/Users/trader"))


@pytest.fixture
def linux(home):
    return PlatformInfo(system="linux", machine="x86_64", home=home)


@pytest.fixture
def config():
    return Settings(_env_file=None)


def make_volumes(names: list[str], root: str = "/Volumes") -> VolumeCache:
    """A cache whose listing always returns *names* without touching disk."""
    return VolumeCache(root, 30.0, clock=lambda: 0.0, lister=lambda _root: list(names))


def make_wine(prefix: Path, *, has_prefix: bool = True, mt4: bool = False, mt5: bool = False):
    program_files = prefix / "drive_c" / "Program Files"
    return WineInfo(
        has_prefix=has_prefix,
        has_metaeditor4=mt4,
        has_metaeditor5=mt5,
        prefix_path=prefix,
        metaeditor4_path=program_files / "MetaTrader 4",
        metaeditor5_path=program_files / "MetaTrader 5",
    )


@pytest.fixture
def make_translator(mac, config):
    def _make(volumes=(), *, platform=None, exists=lambda _p: False, **kwargs):
        return PathTranslator(
            platform or mac,
            config=config,
            volumes=make_volumes(list(volumes)),
            exists=exists,
            **kwargs,
        )

    return _make


@pytest.fixture
def wine_info():
    return make_wine


@pytest.fixture
def volumes():
    return make_volumes


@pytest.fixture
def anyio_backend():
    return "asyncio"
