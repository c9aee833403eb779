"""Route commands that name a Windows executable to Wine or Parallels.

On Windows every command runs as-is. Elsewhere a command referencing an
``.exe`` is sent through the MetaQuotes Wine prefix or through ``prlctl exec``
on a Parallels VM, depending on ``Settings.preferred_backend`` and on what is
actually installed.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import shlex
import shutil
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from metabridge.config import Backend, Settings, settings
from metabridge.constants import EDITOR_REGISTRY, PARALLELS_APP_NAME
from metabridge.discovery.wine import WineInfo, detect_wine
from metabridge.errors import BackendUnavailableError, CommandFailedError
from metabridge.platform_info import PLATFORM, PlatformInfo
from metabridge.utils.paths import PathTranslator, get_translator

logger = logging.getLogger(__name__)

_EXE_RE = re.compile(r"\.exe\b", re.IGNORECASE)
_COMMAND_RE = re.compile(r'^\s*(?:"([^"]*)"|(\S+))(.*)$', re.DOTALL)
_WINDOWS_ARG_RE = re.compile(r'(?:"[^"]*"?|[^\s"])+')
_EDITOR_NAMES = {
    os.path.splitext(entry[key])[0].lower()
    for entry in EDITOR_REGISTRY.values()
    for key in ("exe_name", "wine_exe_name")
}


@dataclass(slots=True)
class RunOptions:
    env: dict[str, str] | None = None
    cwd: str | None = None


@dataclass(frozen=True, slots=True)
class ProcessResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""


@dataclass(slots=True)
class ExecutionOutcome:
    command: str
    backend: Backend | None
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: Exception | None = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None


ProcessRunner = Callable[[str, RunOptions], Awaitable[ProcessResult]]
ExecutionCallback = Callable[[ExecutionOutcome], None]


async def run_shell(command: str, options: RunOptions) -> ProcessResult:
    """Default runner: a shell subprocess with stdout/stderr captured."""
    proc = await asyncio.create_subprocess_shell(
        command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=options.env,
        cwd=options.cwd,
    )
    stdout, stderr = await proc.communicate()
    return ProcessResult(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )


def is_windows_executable(command: str) -> bool:
    return bool(command) and _EXE_RE.search(command) is not None


def is_editor_target(target: str) -> bool:
    lowered = target.lower()
    return any(name in lowered for name in _EDITOR_NAMES)


def split_executable(command: str) -> tuple[str, str]:
    """Split *command* into its executable token and the untouched remainder."""
    m = _COMMAND_RE.match(command)
    if not m:
        return command, ""
    exe = m.group(1) if m.group(1) is not None else m.group(2)
    return exe, m.group(3)


def split_windows_args(command: str) -> list[str]:
    """Split a Windows command line on whitespace outside double quotes.

    Quotes are kept inside each token, so ``/compile:"C:\\My Files\\EA.mq5"``
    stays one token.
    """
    return _WINDOWS_ARG_RE.findall(command)


def resolve_executable_invocation(target: str, platform: PlatformInfo = PLATFORM) -> str:
    """Return how to launch *target* on this host.

    MetaEditor is opened through the Parallels Desktop app; anything else is
    returned unchanged.
    """
    if platform.is_windows or not target:
        return target
    if is_editor_target(target):
        return f'open -a "{PARALLELS_APP_NAME}" --args "{target}"'
    return target


def select_backend(
    command: str,
    platform: PlatformInfo,
    preferred: Backend,
    wine_available: bool,
    vm_available: bool,
) -> Backend:
    """Decide where *command* runs.

    Raises:
        BackendUnavailableError: If the command needs Wine or Parallels and
            neither is usable.
    """
    if platform.is_windows or not is_windows_executable(command):
        return Backend.NATIVE
    if preferred is Backend.WINE and wine_available:
        return Backend.WINE
    if (preferred is Backend.PARALLELS or not wine_available) and vm_available:
        return Backend.PARALLELS
    if wine_available:
        return Backend.WINE
    raise BackendUnavailableError(str(preferred), wine_available, vm_available)


class CommandExecutor:
    def __init__(
        self,
        platform: PlatformInfo = PLATFORM,
        *,
        config: Settings = settings,
        runner: ProcessRunner = run_shell,
        translator: PathTranslator | None = None,
        wine_probe: Callable[[], WineInfo] | None = None,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._platform = platform
        self._config = config
        self._runner = runner
        self._translator = translator
        self._wine_probe = wine_probe or (lambda: detect_wine(platform, config.wine_prefix))
        self._which = which

    @property
    def translator(self) -> PathTranslator:
        if self._translator is None:
            self._translator = get_translator()
        return self._translator

    def vm_available(self) -> bool:
        return bool(self._config.vm_name) and self._which(self._config.prlctl_binary) is not None

    def wine_available(self, wine: WineInfo) -> bool:
        return wine.has_prefix and self._which(self._config.wine_binary) is not None

    def _probe(self) -> tuple[WineInfo, bool, bool]:
        wine = self._wine_probe()
        return wine, self.wine_available(wine), self.vm_available()

    def build_wine_invocation(
        self, command: str, wine: WineInfo, env: dict[str, str] | None
    ) -> tuple[str, dict[str, str]]:
        exe, rest = split_executable(command)
        wine_exe = self.translator.to_wine_path(exe, wine)
        # Wine rebuilds the Windows command line from argv
        args = [arg.replace('"', "") for arg in split_windows_args(rest)]
        invocation = shlex.join([self._config.wine_binary, wine_exe, *args])
        wine_env = os.environ.copy()
        wine_env["WINEPREFIX"] = str(wine.prefix_path)
        wine_env["WINEDEBUG"] = "-all"
        if env:
            wine_env.update(env)
        return invocation, wine_env

    def build_parallels_invocation(self, command: str) -> str:
        """``prlctl exec <vm>`` followed by the command's tokens, each shell-quoted."""
        return shlex.join(
            [self._config.prlctl_binary, "exec", self._config.vm_name, *split_windows_args(command)]
        )

    async def plan(self, command: str, options: RunOptions) -> tuple[Backend, str, RunOptions]:
        if self._platform.is_windows or not is_windows_executable(command):
            return Backend.NATIVE, command, options

        wine, wine_available, vm_available = await asyncio.to_thread(self._probe)
        backend = select_backend(
            command,
            self._platform,
            self._config.preferred_backend,
            wine_available,
            vm_available,
        )
        if backend is Backend.WINE:
            invocation, env = self.build_wine_invocation(command, wine, options.env)
            return backend, invocation, RunOptions(env=env, cwd=options.cwd)
        if backend is Backend.PARALLELS:
            return backend, self.build_parallels_invocation(command), options
        return backend, command, options

    async def execute(
        self,
        command: str,
        on_complete: ExecutionCallback | None = None,
        *,
        env: dict[str, str] | None = None,
        cwd: str | None = None,
    ) -> ExecutionOutcome:
        """Run *command* on the selected backend.

        ``on_complete`` is called exactly once with the outcome, which is also
        returned. Nothing is spawned when no backend is available.
        """
        try:
            backend, invocation, options = await self.plan(command, RunOptions(env=env, cwd=cwd))
        except BackendUnavailableError as exc:
            logger.warning("%s", exc)
            outcome = ExecutionOutcome(command=command, backend=None, error=exc)
        else:
            logger.info("Running via %s: %s", backend, invocation)
            outcome = await self._dispatch(invocation, backend, options)

        if on_complete is not None:
            on_complete(outcome)
        return outcome

    async def _dispatch(
        self, invocation: str, backend: Backend, options: RunOptions
    ) -> ExecutionOutcome:
        try:
            result = await self._runner(invocation, options)
        except Exception as exc:
            logger.warning("Failed to run %s", invocation, exc_info=True)
            return ExecutionOutcome(command=invocation, backend=backend, error=exc)

        error: Exception | None = None
        if result.returncode != 0:
            error = CommandFailedError(invocation, result.returncode, result.stderr)
        return ExecutionOutcome(
            command=invocation,
            backend=backend,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            error=error,
        )


async def execute(
    command: str,
    on_complete: ExecutionCallback | None = None,
    *,
    env: dict[str, str] | None = None,
    cwd: str | None = None,
) -> ExecutionOutcome:
    return await CommandExecutor().execute(command, on_complete, env=env, cwd=cwd)
