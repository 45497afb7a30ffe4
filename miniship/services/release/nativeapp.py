from __future__ import annotations

from miniship.core.result import Err, Ok, Result
from miniship.output.console import ConsoleProtocol, Style
from miniship.services.release.collaborators import MetadataStore
from miniship.services.release.errors import ReleaseError
from miniship.services.release.model import NativeAppDescriptor, NativeAppVersion
from miniship.services.release.prompts import Prompter

COPY_LATEST = "latest"
COPY_NONE = "none"


def copy_version_data(
    *,
    store: MetadataStore,
    descriptor: NativeAppDescriptor,
    source: NativeAppVersion,
) -> Result[None, ReleaseError]:
    """Copy container contents, yarn locks and container version of ``source``."""
    for dep in source.native_deps:
        added = store.add_container_native_dependency(descriptor, dep)
        if isinstance(added, Err):
            return added
    for miniapp in source.miniapps:
        added = store.add_container_miniapp(descriptor, miniapp)
        if isinstance(added, Err):
            return added
    if source.yarn_locks:
        locks = store.set_yarn_locks(descriptor, source.yarn_locks)
        if isinstance(locks, Err):
            return locks
    if source.container_version:
        updated = store.update_container_version(descriptor, source.container_version)
        if isinstance(updated, Err):
            return updated
    return Ok(None)


def pick_copy_source(
    *,
    versions: tuple[NativeAppVersion, ...],
    copy_from_version: str | None,
    prompter: Prompter,
) -> Result[NativeAppVersion | None, ReleaseError]:
    """Which earlier version to copy from; None means start empty."""
    if not versions:
        return Ok(None)
    latest = versions[-1]

    if copy_from_version is None:
        wanted = prompter.confirm(
            f"Do you want to copy data from the previous version ({latest.name}) ?"
        )
        return Ok(latest if wanted else None)
    if copy_from_version == COPY_LATEST:
        return Ok(latest)
    if copy_from_version == COPY_NONE:
        return Ok(None)

    for version in versions:
        if version.name == copy_from_version:
            return Ok(version)
    return Err(
        ReleaseError(
            kind="version_not_found",
            message=(
                "Could not resolve native application version to copy data from: "
                f"{copy_from_version}"
            ),
            hint="Known versions: " + ", ".join(v.name for v in versions),
        )
    )


def _add_within_transaction(
    *,
    descriptor: NativeAppDescriptor,
    copy_from_version: str | None,
    store: MetadataStore,
    prompter: Prompter,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    previous = store.get_versions(descriptor.without_version())
    if isinstance(previous, Err):
        return previous

    console.print(f"Adding {descriptor}", Style.DIM)
    added = store.add_descriptor(descriptor)
    if isinstance(added, Err):
        return added

    source = pick_copy_source(
        versions=previous.value, copy_from_version=copy_from_version, prompter=prompter
    )
    if isinstance(source, Err):
        return source

    if source.value is None:
        if copy_from_version == COPY_NONE:
            console.info(f"Skipping copy over from previous version as '{COPY_NONE}' was specified")
    else:
        console.print(f"Copying data over from version {source.value.name}", Style.DIM)
        copied = copy_version_data(store=store, descriptor=descriptor, source=source.value)
        if isinstance(copied, Err):
            return copied

    return store.commit_transaction(f"Add {descriptor} native application")


def add_native_app(
    *,
    descriptor: NativeAppDescriptor,
    copy_from_version: str | None,
    store: MetadataStore,
    prompter: Prompter,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Add a native application version to the metadata store.

    ``copy_from_version`` is ``"latest"``, ``"none"``, a version name, or None
    to ask the user whether to copy from the latest version. All writes
    happen in one transaction that is discarded on any failure.
    """
    if not descriptor.is_complete:
        return Err(
            ReleaseError(
                kind="invalid_descriptor",
                message=f"descriptor is not complete: {descriptor}",
                hint="Expected: name:platform:version",
            )
        )

    exists = store.has_descriptor(descriptor)
    if isinstance(exists, Err):
        return exists
    if exists.value:
        return Err(
            ReleaseError(
                kind="descriptor_exists",
                message=f"{descriptor} already exists in the metadata store",
            )
        )

    began = store.begin_transaction()
    if isinstance(began, Err):
        return began

    try:
        result = _add_within_transaction(
            descriptor=descriptor,
            copy_from_version=copy_from_version,
            store=store,
            prompter=prompter,
            console=console,
        )
    except BaseException:
        # Aborted prompt (Ctrl+C) must not leave the transaction open.
        store.discard_transaction()
        raise
    if isinstance(result, Err):
        discarded = store.discard_transaction()
        if isinstance(discarded, Err):
            console.warning(f"failed to discard transaction: {discarded.error.message}")
        return result

    console.success(f"{descriptor} was successfully added")
    return Ok(None)
