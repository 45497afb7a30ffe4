from __future__ import annotations

from miniship.services.release.model import ReleaseSet


def reconcile(updated: ReleaseSet, reference: ReleaseSet) -> ReleaseSet:
    """Merge the packages being released with the previous release.

    Every entry of ``updated`` is kept at its new version. Every entry of
    ``reference`` whose identity is not in ``updated`` is carried over at its
    previous version, so an OTA bundle never silently drops a MiniApp.

    Order is ``updated`` (input order) followed by the carried-over
    ``reference`` entries (input order).

    ``updated`` must not repeat an identity; that is not checked here (see
    ``packages.release_set``) and a repeat is copied through as-is.

    Example: updating A to 2.0.0 over a previous release of A@1.0.0 and
    B@1.0.0 gives (A@2.0.0, B@1.0.0).
    """
    superseded = {ref.identity for ref in updated}
    carried = tuple(ref for ref in reference if ref.identity not in superseded)
    return tuple(updated) + carried
