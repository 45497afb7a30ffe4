from __future__ import annotations

from pathlib import Path

import typer

from miniship.cli.commands._helpers import unwrap_or_exit
from miniship.cli.context import build_context
from miniship.core.errors import ErrorCode
from miniship.output.console import Style
from miniship.services.release.model import ReleaseSet
from miniship.services.release.packages import parse_package_refs, release_set
from miniship.services.release.reconcile import reconcile as reconcile_sets
from miniship.services.release.release_file import read_release_file, write_release_file


def reconcile(
    updated: list[str] = typer.Option(
        [], "--updated", "-u", help="Package being released (e.g. @acme/cart@2.0.0)"
    ),
    reference: list[str] = typer.Option(
        [], "--reference", "-r", help="Package of the previous release"
    ),
    reference_file: Path | None = typer.Option(
        None, "--reference-file", help="Release-set file of the previous release"
    ),
    out: Path | None = typer.Option(None, "--out", help="Write the result as a release-set file"),
) -> None:
    """Compute the full package set of the next OTA release."""
    ctx = build_context()

    if reference and reference_file is not None:
        ctx.console.error("--reference cannot be combined with --reference-file")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    updated_refs = unwrap_or_exit(parse_package_refs(updated), ctx)
    updated_set = unwrap_or_exit(release_set(updated_refs), ctx)

    reference_set: ReleaseSet
    if reference_file is not None:
        reference_set = unwrap_or_exit(read_release_file(path=reference_file), ctx)
    else:
        reference_refs = unwrap_or_exit(parse_package_refs(reference), ctx)
        reference_set = unwrap_or_exit(release_set(reference_refs), ctx)

    result = reconcile_sets(updated_set, reference_set)

    changed = {ref.identity for ref in updated_set}
    for ref in result:
        ctx.console.print(str(ref), Style.DEFAULT if ref.identity in changed else Style.DIM)

    if out is not None:
        unwrap_or_exit(write_release_file(path=out, packages=result), ctx)
        ctx.console.success(f"wrote {out}")
