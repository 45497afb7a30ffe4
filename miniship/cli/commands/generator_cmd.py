from __future__ import annotations

from typing import cast

import typer

from miniship.cli.context import build_context
from miniship.core.errors import ErrorCode
from miniship.services.release.container import publication_generator, select_generator
from miniship.services.release.model import PLATFORMS, Platform


def generator(
    platform: str = typer.Argument(..., help="Target platform: android|ios"),
    url: str | None = typer.Option(
        None, "--url", help="Publication URL (overrides [container] in miniship.toml)"
    ),
) -> None:
    """Show which container generator a platform would use."""
    ctx = build_context()

    if platform not in PLATFORMS:
        ctx.console.error(f"unknown platform: {platform} (expected android or ios)")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    target = cast(Platform, platform)
    configured = publication_generator(target, url) or ctx.config.container
    selected = select_generator(target, configured)
    ctx.console.print(f"{selected.name} {selected.url or '(default)'}")
