"""Release orchestration: version reconciliation, OTA updates, containers."""

from miniship.services.release.errors import ReleaseError
from miniship.services.release.model import NativeAppDescriptor, PackageRef, ReleaseSet
from miniship.services.release.packages import parse_descriptor, parse_package_ref, release_set
from miniship.services.release.reconcile import reconcile

__all__ = [
    "NativeAppDescriptor",
    "PackageRef",
    "ReleaseError",
    "ReleaseSet",
    "parse_descriptor",
    "parse_package_ref",
    "reconcile",
    "release_set",
]
