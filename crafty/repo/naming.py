"""Archive file names in the ArchCraft repository.

Files follow the pacman convention
``<name>-<version>-<release>-<arch>.pkg.tar.zst``, for example
``archcraft-about-1.0-2-any.pkg.tar.zst``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from crafty.platform.files import read_prefix

__all__ = [
    "PackageFile",
    "ZSTD_MAGIC",
    "file_pattern_for",
    "installed_name",
    "is_valid_zst",
]

ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"

_ARCHIVE_RE = re.compile(
    r"^(?P<name>.+)-(?P<version>[\d.]+)-(?P<release>\d+)-(?P<arch>any|x86_64)\.pkg\.tar\.zst$"
)

# Accepts any arch suffix; used only to name database records.
_INSTALLED_RE = re.compile(r"^(?P<name>.+)-\d+(\.\d+)*-\d+-[^-]+\.pkg\.tar\.zst$")


@dataclass(frozen=True, slots=True)
class PackageFile:
    filename: str
    name: str
    version: str
    release: str
    arch: str

    @classmethod
    def parse(cls, filename: str) -> PackageFile | None:
        m = _ARCHIVE_RE.match(filename)
        if m is None:
            return None
        return cls(
            filename=filename,
            name=m.group("name"),
            version=m.group("version"),
            release=m.group("release"),
            arch=m.group("arch"),
        )

    @property
    def tar_name(self) -> str:
        """Name of the archive once the zstd layer is removed."""
        return self.filename.removesuffix(".zst")


def file_pattern_for(pkg: str) -> re.Pattern[str]:
    """Pattern matching the archive of ``pkg``, with or without ``archcraft-``."""
    return re.compile(
        rf"^(?:archcraft-)?{re.escape(pkg)}-[\d.]+-\d+-(any|x86_64)\.pkg\.tar\.zst$"
    )


def installed_name(filename: str) -> str:
    """Package name to record in the database for an installed archive."""
    m = _INSTALLED_RE.match(filename)
    if m is None:
        return filename
    return m.group("name")


def is_valid_zst(path: Path) -> bool:
    head = read_prefix(path, len(ZSTD_MAGIC))
    return head is not None and head.startswith(ZSTD_MAGIC)
