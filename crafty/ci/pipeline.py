"""Build-and-test job.

Steps run in order with output streamed to the log; the first non-zero
exit stops the job.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from crafty.ci.errors import CiError
from crafty.core.result import Err, Ok, Result
from crafty.output.console import ConsoleProtocol, Style
from crafty.platform.process import run_silent

__all__ = ["BuildStep", "COLOR_ENV", "DEFAULT_STEPS", "run_build"]

# Force colored output from the build tools even without a TTY.
COLOR_ENV: Mapping[str, str] = {"FORCE_COLOR": "1", "PY_COLORS": "1"}


@dataclass(frozen=True, slots=True)
class BuildStep:
    name: str
    cmd: tuple[str, ...]

    @property
    def display(self) -> str:
        return " ".join(self.cmd)


DEFAULT_STEPS: tuple[BuildStep, ...] = (
    BuildStep(name="Build", cmd=("python", "-m", "compileall", "-q", "crafty")),
    BuildStep(name="Run tests", cmd=("python", "-m", "pytest", "-v")),
)


def run_build(
    *,
    cwd: Path,
    console: ConsoleProtocol,
    steps: Sequence[BuildStep] = DEFAULT_STEPS,
    env: Mapping[str, str] = COLOR_ENV,
) -> Result[None, CiError]:
    for step in steps:
        console.header(step.name)
        console.print(f"$ {step.display}", Style.DIM)

        result = run_silent(list(step.cmd), cwd=cwd, env=env)
        if isinstance(result, Err):
            return Err(
                CiError(
                    kind="build_failed",
                    message=f"{step.name} failed (exit {result.error.returncode})",
                    hint=step.display,
                )
            )

    console.success("build-and-test passed")
    return Ok(None)
