"""Interfaces of the external subsystems release operations drive.

miniship does not implement any of them. Every method returns a Result so
that failures travel back to the caller unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from miniship.core.result import Result
from miniship.services.release.errors import ReleaseError
from miniship.services.release.model import (
    CodePushRelease,
    ContainerRequest,
    InstalledPackage,
    NativeAppDescriptor,
    NativeAppVersion,
    PackageRef,
    ReleaseSet,
)


class MetadataStore(Protocol):
    """The Cauldron: native app versions, their containers and OTA history.

    Writes between ``begin_transaction`` and ``commit_transaction`` are
    applied atomically; ``discard_transaction`` drops them.
    """

    def begin_transaction(self) -> Result[None, ReleaseError]: ...

    def commit_transaction(self, message: str) -> Result[None, ReleaseError]: ...

    def discard_transaction(self) -> Result[None, ReleaseError]: ...

    def has_descriptor(self, descriptor: NativeAppDescriptor) -> Result[bool, ReleaseError]: ...

    def add_descriptor(self, descriptor: NativeAppDescriptor) -> Result[None, ReleaseError]: ...

    def get_versions(
        self, descriptor: NativeAppDescriptor
    ) -> Result[tuple[NativeAppVersion, ...], ReleaseError]:
        """Versions of ``descriptor``'s name+platform, oldest first; empty if unknown."""
        ...

    def get_config(
        self, descriptor: NativeAppDescriptor
    ) -> Result[Mapping[str, object] | None, ReleaseError]: ...

    def get_native_dependencies(
        self, descriptor: NativeAppDescriptor
    ) -> Result[tuple[PackageRef, ...], ReleaseError]: ...

    def get_container_miniapps(
        self, descriptor: NativeAppDescriptor
    ) -> Result[ReleaseSet, ReleaseError]: ...

    def get_previously_released_packages(
        self, descriptor: NativeAppDescriptor
    ) -> Result[ReleaseSet, ReleaseError]:
        """MiniApps of the latest OTA release; empty if there was none."""
        ...

    def record_release(
        self, descriptor: NativeAppDescriptor, packages: ReleaseSet
    ) -> Result[None, ReleaseError]: ...

    def add_container_native_dependency(
        self, descriptor: NativeAppDescriptor, dependency: PackageRef
    ) -> Result[None, ReleaseError]: ...

    def add_container_miniapp(
        self, descriptor: NativeAppDescriptor, miniapp: PackageRef
    ) -> Result[None, ReleaseError]: ...

    def set_yarn_locks(
        self, descriptor: NativeAppDescriptor, yarn_locks: Mapping[str, str]
    ) -> Result[None, ReleaseError]: ...

    def update_container_version(
        self, descriptor: NativeAppDescriptor, version: str
    ) -> Result[None, ReleaseError]: ...


class BundleGenerator(Protocol):
    def generate(self, packages: ReleaseSet, target_dir: Path) -> Result[None, ReleaseError]:
        """Build the composite JavaScript bundle of ``packages`` in ``target_dir``."""
        ...


class ContainerGenerator(Protocol):
    def generate_container(self, request: ContainerRequest) -> Result[None, ReleaseError]: ...


class OtaReleaseClient(Protocol):
    def release(
        self, bundle_dir: Path, target_version: str, options: CodePushRelease
    ) -> Result[None, ReleaseError]: ...


class PackageInstaller(Protocol):
    def install(self, package: str, workdir: Path) -> Result[InstalledPackage, ReleaseError]:
        """Install ``package`` into the empty project ``workdir``."""
        ...
