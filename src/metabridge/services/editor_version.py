"""Read the build number and target CPU of a MetaEditor binary."""

import logging
import os
from dataclasses import dataclass

import pefile

logger = logging.getLogger(__name__)

_RESOURCE_DIRECTORY = pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_RESOURCE"]
_MACHINE_NAMES = {
    pefile.MACHINE_TYPE["IMAGE_FILE_MACHINE_I386"]: "x86",
    pefile.MACHINE_TYPE["IMAGE_FILE_MACHINE_AMD64"]: "x64",
    pefile.MACHINE_TYPE["IMAGE_FILE_MACHINE_ARM64"]: "arm64",
}


@dataclass(frozen=True, slots=True)
class EditorBinary:
    version: str | None
    machine: str | None


def _dotted(fixed_info) -> str:
    ms, ls = fixed_info.FileVersionMS, fixed_info.FileVersionLS
    return f"{ms >> 16}.{ms & 0xFFFF}.{ls >> 16}.{ls & 0xFFFF}"


def inspect_editor(exe_path: str) -> EditorBinary | None:
    """Return the file version and machine type of a MetaEditor executable.

    ``None`` when the file is missing or is not a readable PE image. A PE
    without a version resource yields ``EditorBinary(version=None, ...)``.
    """
    if not exe_path or not os.path.isfile(exe_path):
        return None

    try:
        pe = pefile.PE(exe_path, fast_load=True)
    except (pefile.PEFormatError, OSError):
        logger.warning("Not a readable PE image: %s", exe_path, exc_info=True)
        return None

    try:
        pe.parse_data_directories(directories=[_RESOURCE_DIRECTORY])
        fixed = getattr(pe, "VS_FIXEDFILEINFO", None)
        return EditorBinary(
            version=_dotted(fixed[0]) if fixed else None,
            machine=_MACHINE_NAMES.get(pe.FILE_HEADER.Machine),
        )
    except pefile.PEFormatError:
        logger.warning("Failed to read PE resources from %s", exe_path, exc_info=True)
        return None
    finally:
        pe.close()
