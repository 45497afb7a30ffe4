"""Error presentation utilities.

Centralized formatting and exit code mapping for release errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from miniship.core.errors import ErrorCode
from miniship.output.console import Style
from miniship.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from miniship.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "store_unavailable" | "codepush_plugin_missing" | "codepush_missing":
            return int(ErrorCode.ENV_ERROR)
        case "install_failed" | "generation_failed" | "native_dependency_conflict":
            return int(ErrorCode.BUILD_ERROR)
        case "release_failed":
            return int(ErrorCode.NETWORK_ERROR)
        case "io_failed":
            return int(ErrorCode.IO_ERROR)
        case _:
            return int(ErrorCode.USER_ERROR)
