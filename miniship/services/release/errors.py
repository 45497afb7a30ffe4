from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "invalid_input",
    "invalid_package",
    "duplicate_package",
    "invalid_descriptor",
    "descriptor_exists",
    "version_not_found",
    "codepush_plugin_missing",
    "codepush_missing",
    "native_dependency_conflict",
    "store_unavailable",
    "install_failed",
    "generation_failed",
    "release_failed",
    "io_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
