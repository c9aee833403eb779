"""Locate the Parallels shared folders standing in for the guest's C: and D: drives."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePosixPath

from metabridge.constants import (
    C_DRIVE_MARKER,
    D_DRIVE_MARKER,
    VOLUMES_ROOT,
    WINDOWS_VOLUME_HINT,
)


@dataclass(frozen=True, slots=True)
class ParallelsMounts:
    c_drive: str | None = None
    d_drive: str | None = None

    def for_letter(self, letter: str) -> str | None:
        return {"C": self.c_drive, "D": self.d_drive}.get(letter.upper())

    def items(self) -> list[tuple[str, str]]:
        """Resolved ``(letter, mount_path)`` pairs, C before D."""
        return [(k, v) for k, v in (("C", self.c_drive), ("D", self.d_drive)) if v]


def is_c_drive_volume(name: str) -> bool:
    return C_DRIVE_MARKER in name or WINDOWS_VOLUME_HINT in name.lower()


def is_d_drive_volume(name: str) -> bool:
    return D_DRIVE_MARKER in name


def find_parallels_mounts(
    volumes: Iterable[str], volumes_root: str = VOLUMES_ROOT
) -> ParallelsMounts:
    c_drive: str | None = None
    d_drive: str | None = None
    root = PurePosixPath(volumes_root)
    for vol in volumes:
        if c_drive is None and is_c_drive_volume(vol):
            c_drive = str(root / vol)
        if d_drive is None and is_d_drive_volume(vol):
            d_drive = str(root / vol)
    return ParallelsMounts(c_drive=c_drive, d_drive=d_drive)
