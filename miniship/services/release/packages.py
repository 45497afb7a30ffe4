from __future__ import annotations

import re
from collections.abc import Iterable

from miniship.core.result import Err, Ok, Result
from miniship.services.release.errors import ReleaseError
from miniship.services.release.model import (
    PLATFORMS,
    NativeAppDescriptor,
    PackageRef,
    ReleaseSet,
)

_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._~-]*$")
_VERSION_RE = re.compile(r"^[^\s@/]+$")

_PACKAGE_HINT = "Expected: name, name@version, @scope/name or @scope/name@version"


def _invalid_package(text: str, reason: str) -> Err[ReleaseError]:
    return Err(
        ReleaseError(
            kind="invalid_package",
            message=f"invalid package {text!r}: {reason}",
            hint=_PACKAGE_HINT,
        )
    )


def parse_package_ref(text: str) -> Result[PackageRef, ReleaseError]:
    raw = text.strip()
    if not raw:
        return _invalid_package(text, "empty")

    scope: str | None = None
    rest = raw
    if raw.startswith("@"):
        scope_part, slash, rest = raw[1:].partition("/")
        if not slash:
            return _invalid_package(text, "scoped name is missing '/'")
        if not _NAME_RE.match(scope_part):
            return _invalid_package(text, "bad scope")
        scope = scope_part

    name, at, version = rest.partition("@")
    if not _NAME_RE.match(name):
        return _invalid_package(text, "bad name")
    if at and not _VERSION_RE.match(version):
        return _invalid_package(text, "bad version")

    return Ok(PackageRef(name=name, scope=scope, version=version if at else None))


def parse_package_refs(texts: Iterable[str]) -> Result[tuple[PackageRef, ...], ReleaseError]:
    refs: list[PackageRef] = []
    for text in texts:
        parsed = parse_package_ref(text)
        if isinstance(parsed, Err):
            return parsed
        refs.append(parsed.value)
    return Ok(tuple(refs))


def duplicate_identities(refs: Iterable[PackageRef]) -> tuple[str, ...]:
    seen: set[str] = set()
    dupes: list[str] = []
    for ref in refs:
        if ref.identity in seen and ref.identity not in dupes:
            dupes.append(ref.identity)
        seen.add(ref.identity)
    return tuple(dupes)


def release_set(refs: Iterable[PackageRef]) -> Result[ReleaseSet, ReleaseError]:
    """Validate identity uniqueness and freeze ``refs`` into a ReleaseSet."""
    items = tuple(refs)
    dupes = duplicate_identities(items)
    if dupes:
        return Err(
            ReleaseError(
                kind="duplicate_package",
                message=f"package listed more than once: {', '.join(dupes)}",
                hint="Give each package a single version.",
            )
        )
    return Ok(items)


def find_version_conflicts(refs: Iterable[PackageRef]) -> tuple[str, ...]:
    """Identities that appear with more than one distinct version, first-seen order.

    An unversioned ref accepts any version and never conflicts.
    """
    versions: dict[str, set[str]] = {}
    for ref in refs:
        if ref.version is None:
            continue
        versions.setdefault(ref.identity, set()).add(ref.version)
    return tuple(identity for identity, vs in versions.items() if len(vs) > 1)


def parse_descriptor(text: str) -> Result[NativeAppDescriptor, ReleaseError]:
    parts = [p.strip() for p in text.strip().split(":")]
    hint = "Expected: name[:platform[:version]], platform is android or ios"

    if len(parts) > 3 or any(not p for p in parts):
        return Err(
            ReleaseError(
                kind="invalid_descriptor",
                message=f"invalid native application descriptor: {text!r}",
                hint=hint,
            )
        )

    name = parts[0]
    platform = parts[1] if len(parts) > 1 else None
    version = parts[2] if len(parts) > 2 else None

    if platform is not None and platform not in PLATFORMS:
        return Err(
            ReleaseError(
                kind="invalid_descriptor",
                message=f"unknown platform in descriptor {text!r}: {platform}",
                hint=hint,
            )
        )

    return Ok(NativeAppDescriptor(name=name, platform=platform, version=version))
