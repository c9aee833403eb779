from typing import TypedDict

VOLUMES_ROOT = "/Volumes"
VOLUME_CACHE_TTL = 30.0

# Parallels exposes the guest drives to macOS as e.g. "/Volumes/[C] Windows 11"
C_DRIVE_MARKER = "[C]"
D_DRIVE_MARKER = "[D]"
WINDOWS_VOLUME_HINT = "windows"

# UNC share Parallels maps onto the macOS home directory
PARALLELS_HOME_SHARE = r"\\Mac\Home"
PARALLELS_APP_NAME = "Parallels Desktop"

WINE_PREFIX_MAC = "Library/Application Support/net.metaquotes.wine.metatrader5"
WINE_PREFIX_LINUX = ".mt5"
WINE_PROGRAM_FILES = "drive_c/Program Files"
WINE_DRIVE_C = "drive_c"
WINE_DRIVE_D = "dosdevices/d:"

DEFAULT_ALTERNATIVE_ROOTS = [
    "/private/var/folders/parallels",
    "/Users/Shared/Parallels",
]


class EditorRegistryEntry(TypedDict):
    install_dir: str
    wine_dir: str
    exe_name: str
    wine_exe_name: str


EDITOR_REGISTRY: dict[str, EditorRegistryEntry] = {
    "metaeditor4": {
        "install_dir": "MT4_Install\\MetaTrader",
        "wine_dir": "MetaTrader 4",
        "exe_name": "metaeditor.exe",
        "wine_exe_name": "metaeditor.exe",
    },
    "metaeditor5": {
        "install_dir": "MT5_Install\\MetaTrader",
        "wine_dir": "MetaTrader 5",
        "exe_name": "metaeditor.exe",
        "wine_exe_name": "metaeditor64.exe",
    },
}
