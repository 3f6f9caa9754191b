"""Subprocess execution returning Result values.

Two flavours:
- ``run`` captures stdout (git rev-parse, gh queries).
- ``run_silent`` lets the child talk to the terminal directly (pacman,
  unzstd, build steps) and only reports the exit status.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from crafty.core.result import Err, Ok, Result

__all__ = ["ProcessError", "merged_env", "run", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess.

    ``returncode`` is -1 when the process never ran (missing binary,
    timeout).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def display(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return cmd_str

    def __str__(self) -> str:
        return f"{self.display} failed (exit {self.returncode})"


def merged_env(extra: Mapping[str, str] | None) -> dict[str, str] | None:
    """Overlay ``extra`` on the current environment (None = inherit as-is)."""
    if not extra:
        return None
    env = dict(os.environ)
    env.update(extra)
    return env


def _not_started(cmd: list[str], message: str, stdout: str = "") -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout=stdout, stderr=message))


def run(
    cmd: list[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    ``env`` entries are added on top of the inherited environment.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            env=merged_env(env),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return _not_started(cmd, f"Command timed out after {timeout}s", partial)
    except OSError as e:
        return _not_started(cmd, str(e))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with output streamed to the terminal."""
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            env=merged_env(env),
            check=False,
        )
    except OSError as e:
        return _not_started(cmd, str(e))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout="",
                stderr="",
            )
        )

    return Ok(None)
