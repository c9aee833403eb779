"""Windows path translation and Wine/Parallels routing for MetaEditor."""

from metabridge.config import Backend, Settings, settings
from metabridge.errors import BackendUnavailableError, CommandFailedError, MetabridgeError
from metabridge.platform_info import PLATFORM, PlatformInfo
from metabridge.services.defaults import (
    EditorInstallation,
    PlatformDefaults,
    detect_installations,
    get_platform_defaults,
)
from metabridge.services.executor import (
    CommandExecutor,
    ExecutionOutcome,
    execute,
    resolve_executable_invocation,
    select_backend,
)
from metabridge.utils.paths import PathTranslator, to_host_path, to_wine_path, to_windows_path

__all__ = [
    "PLATFORM",
    "Backend",
    "BackendUnavailableError",
    "CommandExecutor",
    "CommandFailedError",
    "EditorInstallation",
    "ExecutionOutcome",
    "MetabridgeError",
    "PathTranslator",
    "PlatformDefaults",
    "PlatformInfo",
    "Settings",
    "detect_installations",
    "execute",
    "get_platform_defaults",
    "resolve_executable_invocation",
    "select_backend",
    "settings",
    "to_host_path",
    "to_windows_path",
    "to_wine_path",
]
