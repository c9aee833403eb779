"""Host identity, computed once at import time.

Every translator and executor takes a ``PlatformInfo`` so tests can describe
a macOS host from a Linux CI box without patching ``sys.platform``.
"""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from pathlib import Path

_ARM_MACHINES = {"arm64", "aarch64", "arm", "armv7l"}


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    system: str
    machine: str
    home: Path

    @property
    def is_windows(self) -> bool:
        return self.system == "win32"

    @property
    def is_mac(self) -> bool:
        return self.system == "darwin"

    @property
    def is_linux(self) -> bool:
        return self.system == "linux"

    @property
    def is_arm(self) -> bool:
        return self.machine.lower() in _ARM_MACHINES

    @classmethod
    def detect(cls) -> PlatformInfo:
        return cls(system=sys.platform, machine=platform.machine(), home=Path.home())


PLATFORM = PlatformInfo.detect()
