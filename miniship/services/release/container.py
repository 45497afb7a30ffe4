from __future__ import annotations

import tempfile
from collections.abc import Sequence
from pathlib import Path

from miniship.core.config import GeneratorConfig
from miniship.core.result import Err, Ok, Result
from miniship.output.console import ConsoleProtocol, Style
from miniship.services.release.collaborators import (
    ContainerGenerator,
    MetadataStore,
    PackageInstaller,
)
from miniship.services.release.errors import ReleaseError
from miniship.services.release.model import (
    ContainerMiniApp,
    ContainerRequest,
    NativeAppDescriptor,
    PackageRef,
    Platform,
)
from miniship.services.release.ota import load_store_config
from miniship.services.release.packages import find_version_conflicts

DEFAULT_CONTAINER_VERSION = "1.0.0"
LOCAL_NATIVE_APP_NAME = "local"


def select_generator(platform: Platform, config: GeneratorConfig | None) -> GeneratorConfig:
    """Explicit configuration wins; otherwise maven for android, github for ios."""
    if config is not None:
        return config
    if platform == "android":
        return GeneratorConfig(name="maven")
    return GeneratorConfig(name="github")


def publication_generator(platform: Platform, url: str | None) -> GeneratorConfig | None:
    if url is None:
        return None
    if platform == "android":
        return GeneratorConfig(name="maven", url=url)
    return GeneratorConfig(name="github", url=url)


def run_cauldron_container_gen(
    *,
    descriptor: NativeAppDescriptor,
    version: str,
    store: MetadataStore,
    generator: ContainerGenerator,
    console: ConsoleProtocol,
    working_dir: Path,
    publish: bool = False,
) -> Result[ContainerRequest, ReleaseError]:
    """Generate the container of a native app version recorded in the store."""
    if descriptor.platform is None:
        return Err(
            ReleaseError(
                kind="invalid_descriptor",
                message=f"descriptor has no platform: {descriptor}",
                hint="Expected: name:platform:version",
            )
        )

    plugins = store.get_native_dependencies(descriptor)
    if isinstance(plugins, Err):
        return plugins
    miniapps = store.get_container_miniapps(descriptor)
    if isinstance(miniapps, Err):
        return miniapps

    configured: GeneratorConfig | None = None
    if publish:
        cfg = load_store_config(store=store, descriptor=descriptor)
        if isinstance(cfg, Err):
            return cfg
        configured = cfg.value.container
    else:
        console.info("Container publication is disabled. Will generate the container locally.")

    request = ContainerRequest(
        container_version=version,
        native_app_name=descriptor.name,
        platform=descriptor.platform,
        generator=select_generator(descriptor.platform, configured),
        working_dir=working_dir,
        native_deps=plugins.value,
        miniapps=tuple(ContainerMiniApp(ref=m) for m in miniapps.value),
    )

    console.info(f"Generating {descriptor.platform} container {version} ({request.generator.name})")
    generated = generator.generate_container(request)
    if isinstance(generated, Err):
        return generated
    return Ok(request)


def run_local_container_gen(
    *,
    packages: Sequence[str],
    platform: Platform,
    installer: PackageInstaller,
    generator: ContainerGenerator,
    console: ConsoleProtocol,
    working_dir: Path,
    container_version: str = DEFAULT_CONTAINER_VERSION,
    native_app_name: str = LOCAL_NATIVE_APP_NAME,
    publication_url: str | None = None,
) -> Result[ContainerRequest, ReleaseError]:
    """Generate a container from MiniApp packages without the metadata store.

    ``packages`` are anything the package manager can install: registry specs
    (``@acme/cart@1.2.3``), git URLs or ``file:`` paths. Each one is installed
    into its own scratch project to discover its native dependencies.
    """
    miniapps: list[ContainerMiniApp] = []
    native_deps: list[PackageRef] = []

    for package in packages:
        console.info(f"Processing {package}")
        with tempfile.TemporaryDirectory(prefix="miniship-") as tmp:
            installed = installer.install(package, Path(tmp))
        if isinstance(installed, Err):
            return installed

        miniapp = installed.value.ref
        miniapps.append(ContainerMiniApp(ref=miniapp, source=package))
        for dep in installed.value.native_dependencies:
            # The MiniApp itself shows up among the scanned node_modules.
            if dep.identity == miniapp.identity:
                continue
            if dep not in native_deps:
                native_deps.append(dep)

    conflicts = find_version_conflicts(native_deps)
    if conflicts:
        return Err(
            ReleaseError(
                kind="native_dependency_conflict",
                message=(
                    "The following native dependencies are not using the same version: "
                    + ", ".join(conflicts)
                ),
                hint="Align the MiniApps on a single version of each native dependency.",
            )
        )

    request = ContainerRequest(
        container_version=container_version,
        native_app_name=native_app_name,
        platform=platform,
        generator=select_generator(platform, publication_generator(platform, publication_url)),
        working_dir=working_dir,
        native_deps=tuple(native_deps),
        miniapps=tuple(miniapps),
    )

    console.info("Generating container")
    for dep in request.native_deps:
        console.print(f"  {dep}", Style.DIM)
    generated = generator.generate_container(request)
    if isinstance(generated, Err):
        return generated
    return Ok(request)
