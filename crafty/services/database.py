"""Record of packages installed through crafty.

Stored as pretty-printed JSON:

    {
      "packages": [
        "archcraft-about",
        "archcraft-openbox"
      ]
    }

A missing or corrupted file reads as an empty database.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from crafty.core.result import Err, Ok, Result
from crafty.core.structured import as_obj_list, as_str_dict
from crafty.platform.files import atomic_write_text
from crafty.services.errors import PackageError

__all__ = ["PackageDb"]


def _empty() -> set[str]:
    return set()


@dataclass
class PackageDb:
    path: Path
    packages: set[str] = field(default_factory=_empty)

    @classmethod
    def load(cls, path: Path) -> PackageDb:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError:
            return cls(path=path)

        try:
            data: object = json.loads(raw)
        except json.JSONDecodeError:
            return cls(path=path)

        table = as_str_dict(data)
        items = as_obj_list(table.get("packages")) if table is not None else None
        if items is None:
            return cls(path=path)
        return cls(path=path, packages={p for p in items if isinstance(p, str) and p})

    def save(self) -> Result[None, PackageError]:
        content = json.dumps({"packages": sorted(self.packages)}, indent=2) + "\n"
        try:
            atomic_write_text(self.path, content)
        except OSError as e:
            return Err(
                PackageError(
                    kind="database_failed",
                    message=f"failed to write installed-package database: {e}",
                    hint=str(self.path),
                )
            )
        return Ok(None)

    def add(self, pkg: str) -> Result[None, PackageError]:
        self.packages.add(pkg)
        return self.save()

    def remove(self, pkg: str) -> Result[None, PackageError]:
        self.packages.discard(pkg)
        return self.save()

    def contains(self, pkg: str) -> bool:
        return pkg in self.packages

    def sorted(self) -> list[str]:
        return sorted(self.packages)
