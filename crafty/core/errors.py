"""Exit codes for CLI commands.

Every command maps its failure onto one of these values so scripts can
tell a bad argument from a broken network or a failed pacman run.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success
    - 1: User error (unknown package, not installed via crafty)
    - 2: Environment error (missing gh, bad config)
    - 3: Build error (pacman failed, CI step failed)
    - 4: Network error (index or download unreachable)
    - 5: I/O error (archive unreadable, database not writable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
