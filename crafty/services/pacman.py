"""Bridge to the local package manager.

pacman and unzstd both print their own progress and prompts, so they run
with ``run_silent`` and inherit the terminal.
"""

from __future__ import annotations

from pathlib import Path

from crafty.core.result import Result
from crafty.platform.process import ProcessError, run_silent

__all__ = ["decompress", "install_archive", "pacman_cmd", "remove_package"]


def pacman_cmd(args: list[str], *, sudo: bool) -> list[str]:
    cmd = ["pacman", *args]
    return ["sudo", *cmd] if sudo else cmd


def install_archive(archive: Path, *, sudo: bool = True) -> Result[None, ProcessError]:
    return run_silent(pacman_cmd(["-U", str(archive)], sudo=sudo))


def decompress(archive: Path, dest: Path) -> Result[None, ProcessError]:
    """Strip the zstd layer: ``unzstd <archive> -o <dest>``."""
    return run_silent(["unzstd", str(archive), "-o", str(dest)])


def remove_package(name: str, *, sudo: bool = True) -> Result[None, ProcessError]:
    # -Rns: also drop unneeded dependencies and .pacsave files
    return run_silent(pacman_cmd(["-Rns", name], sudo=sudo))
