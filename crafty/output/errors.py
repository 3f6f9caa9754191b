"""Error presentation and exit-code mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from crafty.ci.errors import CiError
from crafty.core.errors import ErrorCode
from crafty.output.console import Style
from crafty.services.errors import PackageError

if TYPE_CHECKING:
    from crafty.output.console import ConsoleProtocol

__all__ = ["error_exit_code", "print_error"]


def print_error(error: PackageError | CiError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def error_exit_code(error: PackageError | CiError) -> int:
    match error.kind:
        case "not_found" | "not_installed":
            return int(ErrorCode.USER_ERROR)
        case "gh_missing" | "token_missing" | "git_failed":
            return int(ErrorCode.ENV_ERROR)
        case "network" | "index_invalid" | "download_failed":
            return int(ErrorCode.NETWORK_ERROR)
        case "invalid_archive" | "database_failed":
            return int(ErrorCode.IO_ERROR)
        case (
            "decompress_failed"
            | "install_failed"
            | "remove_failed"
            | "build_failed"
            | "release_failed"
        ):
            return int(ErrorCode.BUILD_ERROR)
    return int(ErrorCode.BUILD_ERROR)
