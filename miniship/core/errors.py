"""Exit codes for the miniship CLI.

The numeric values are part of the command-line contract and should remain
stable:
- 0: Success
- 1: User error (bad package string, unknown version, invalid descriptor)
- 2: Environment error (metadata store unreachable, missing code-push binary)
- 3: Build error (container or bundle generation failed)
- 4: Network error (OTA release rejected or unreachable)
- 5: I/O error (release-set file unreadable or unwritable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
