"""Exit codes for CLI commands.

Each code maps to a shell exit status so a cron job or shell prompt can tell
"something needs attention" apart from "the check itself could not run".
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad arguments, a path on the command line that does not exist)
    - 2: Environment error (git missing, unreadable config, not a working copy)
    - 3: Parse error (git produced output in an unexpected format)
    - 4: Dirty (at least one repository needs attention, with --strict)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    PARSE_ERROR = 3
    DIRTY = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
