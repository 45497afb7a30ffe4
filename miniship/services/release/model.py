from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from miniship.core.config import GeneratorConfig

Platform = Literal["android", "ios"]
PLATFORMS: tuple[Platform, ...] = ("android", "ios")

CODEPUSH_PLUGIN_NAME = "react-native-code-push"


@dataclass(frozen=True, slots=True)
class PackageRef:
    """A package identity (optional scope + name) with an optional version.

    Two refs denote the same package when their ``identity`` matches,
    whatever their versions.
    """

    name: str
    scope: str | None = None
    version: str | None = None

    @property
    def identity(self) -> str:
        if self.scope:
            return f"@{self.scope}/{self.name}"
        return self.name

    def __str__(self) -> str:
        if self.version:
            return f"{self.identity}@{self.version}"
        return self.identity


# Ordered, identity-unique. Build through packages.release_set() at boundaries.
ReleaseSet = tuple[PackageRef, ...]


@dataclass(frozen=True, slots=True)
class NativeAppDescriptor:
    """``name[:platform[:version]]`` of a native application in the store."""

    name: str
    platform: Platform | None = None
    version: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.platform is not None and self.version is not None

    def without_version(self) -> NativeAppDescriptor:
        return NativeAppDescriptor(name=self.name, platform=self.platform)

    def __str__(self) -> str:
        return ":".join(p for p in (self.name, self.platform, self.version) if p)


@dataclass(frozen=True, slots=True)
class NativeAppVersion:
    """Container data recorded for one native application version."""

    name: str
    native_deps: tuple[PackageRef, ...] = ()
    miniapps: ReleaseSet = ()
    yarn_locks: dict[str, str] | None = None
    container_version: str | None = None


@dataclass(frozen=True, slots=True)
class CodePushOptions:
    """Caller-provided CodePush parameters. None means "ask the user"."""

    app_name: str | None = None
    deployment_name: str | None = None
    platform_name: str | None = None
    # Defaults to the descriptor version.
    target_binary_version: str | None = None
    mandatory: bool = False
    rollout_percentage: int | None = None


@dataclass(frozen=True, slots=True)
class CodePushRelease:
    app_name: str
    deployment_name: str
    platform_name: str
    mandatory: bool
    rollout_percentage: int | None


@dataclass(frozen=True, slots=True)
class InstalledPackage:
    """A MiniApp package installed by the package manager."""

    ref: PackageRef
    # What was installed: registry spec, git URL or file: path.
    source: str
    native_dependencies: tuple[PackageRef, ...] = ()


@dataclass(frozen=True, slots=True)
class ContainerMiniApp:
    ref: PackageRef
    source: str | None = None


@dataclass(frozen=True, slots=True)
class ContainerRequest:
    container_version: str
    native_app_name: str
    platform: Platform
    generator: GeneratorConfig
    working_dir: Path
    native_deps: tuple[PackageRef, ...] = ()
    miniapps: tuple[ContainerMiniApp, ...] = ()
