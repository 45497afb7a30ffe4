"""Tests for miniship.output.console and miniship.output.errors."""

from __future__ import annotations

import pytest

from miniship.core.errors import ErrorCode
from miniship.output.console import MockConsole, RichConsole, Style
from miniship.output.errors import print_release_error, release_error_exit_code
from miniship.services.release.errors import ReleaseError


class TestMockConsole:
    def test_captures_styles(self) -> None:
        console = MockConsole()
        console.print("plain")
        console.print("muted", Style.DIM)
        console.success("done")
        console.warning("careful")
        console.info("fyi")
        console.header("Section")

        assert console.messages == [
            "plain",
            "muted",
            "OK done",
            "warning: careful",
            "info: fyi",
            "Section",
        ]
        assert [o.style for o in console.outputs][1] == Style.DIM
        assert not console.has_error()

    def test_error_and_find(self) -> None:
        console = MockConsole()
        console.error("boom")
        assert console.has_error()
        assert console.find("boom")[0].style == Style.ERROR
        assert console.text == "error: boom"


def test_rich_console_keeps_brackets_literal(capsys: pytest.CaptureFixture[str]) -> None:
    console = RichConsole()
    console.print("[@acme/cart]@1.0.0")
    console.info("[bold]not markup[/bold]")
    out = capsys.readouterr().out
    assert "[@acme/cart]@1.0.0" in out
    assert "[bold]not markup[/bold]" in out


def test_print_release_error_with_hint() -> None:
    console = MockConsole()
    print_release_error(
        ReleaseError(kind="invalid_package", message="invalid package 'x@'", hint="Expected: ..."),
        console,
    )
    assert console.messages == ["error: invalid package 'x@'", "hint: Expected: ..."]


@pytest.mark.parametrize(
    ("kind", "code"),
    [
        ("invalid_package", ErrorCode.USER_ERROR),
        ("version_not_found", ErrorCode.USER_ERROR),
        ("store_unavailable", ErrorCode.ENV_ERROR),
        ("codepush_missing", ErrorCode.ENV_ERROR),
        ("generation_failed", ErrorCode.BUILD_ERROR),
        ("native_dependency_conflict", ErrorCode.BUILD_ERROR),
        ("release_failed", ErrorCode.NETWORK_ERROR),
        ("io_failed", ErrorCode.IO_ERROR),
    ],
)
def test_release_error_exit_code(kind: str, code: ErrorCode) -> None:
    error = ReleaseError(kind=kind, message="x")  # type: ignore[arg-type]
    assert release_error_exit_code(error) == int(code)
