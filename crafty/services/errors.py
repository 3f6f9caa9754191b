from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PackageErrorKind = Literal[
    "network",
    "index_invalid",
    "not_found",
    "not_installed",
    "download_failed",
    "invalid_archive",
    "decompress_failed",
    "install_failed",
    "remove_failed",
    "database_failed",
]


@dataclass(frozen=True, slots=True)
class PackageError:
    kind: PackageErrorKind
    message: str
    hint: str | None = None
