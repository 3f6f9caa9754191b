from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class CiError:
    kind: Literal[
        "build_failed",
        "git_failed",
        "gh_missing",
        "token_missing",
        "release_failed",
    ]
    message: str
    hint: str | None = None
