from __future__ import annotations

from pathlib import Path

import pytest

from miniship.core.config import CodePushConfig, Config
from miniship.core.errors import ErrorCode
from miniship.core.result import Err, Ok, Result
from miniship.output.errors import release_error_exit_code
from miniship.platform.process import ProcessError
from miniship.services.release.codepush import CodePushCli, release_react_command
from miniship.services.release.model import CodePushRelease

RELEASE = CodePushRelease(
    app_name="Shop-Android",
    deployment_name="Staging",
    platform_name="android",
    mandatory=False,
    rollout_percentage=None,
)


def test_release_react_command_minimal() -> None:
    cmd = release_react_command(binary="code-push", target_version="5.0.0", options=RELEASE)
    assert cmd == [
        "code-push",
        "release-react",
        "Shop-Android",
        "android",
        "--targetBinaryVersion",
        "5.0.0",
        "--deploymentName",
        "Staging",
    ]


def test_release_react_command_mandatory_and_rollout() -> None:
    options = CodePushRelease(
        app_name="Shop-iOS",
        deployment_name="Production",
        platform_name="ios",
        mandatory=True,
        rollout_percentage=10,
    )
    cmd = release_react_command(binary="cp", target_version="5.0.x", options=options)
    assert cmd[-3:] == ["--mandatory", "--rollout", "10%"]


def test_release_runs_in_bundle_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import miniship.services.release.codepush as codepush

    seen: dict[str, object] = {}

    def fake_run(
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        seen["cmd"] = cmd
        seen["cwd"] = cwd
        return Ok("Successfully released")

    monkeypatch.setattr(codepush, "run_process", fake_run)

    result = CodePushCli("/opt/bin/code-push").release(tmp_path, "5.0.0", RELEASE)

    assert result == Ok(None)
    assert seen["cwd"] == tmp_path
    assert isinstance(seen["cmd"], list)
    assert seen["cmd"][0] == "/opt/bin/code-push"


def test_release_failure_maps_to_release_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import miniship.services.release.codepush as codepush

    def fake_run(
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        return Err(
            ProcessError(
                command=tuple(cmd), returncode=1, stdout="", stderr="[Error] Unauthorized\n"
            )
        )

    monkeypatch.setattr(codepush, "run_process", fake_run)

    result = CodePushCli().release(tmp_path, "5.0.0", RELEASE)

    assert isinstance(result, Err)
    assert result.error.kind == "release_failed"
    assert result.error.hint == "[Error] Unauthorized"


def test_ensure_available_missing_binary() -> None:
    result = CodePushCli("definitely-not-code-push-12345").ensure_available()
    assert isinstance(result, Err)
    assert result.error.kind == "codepush_missing"


def test_release_with_missing_binary_reports_codepush_missing(tmp_path: Path) -> None:
    cli = CodePushCli.from_config(CodePushConfig(binary="definitely-not-code-push-12345"))

    result = cli.release(tmp_path, "5.0.0", RELEASE)

    assert isinstance(result, Err)
    assert result.error.kind == "codepush_missing"
    assert release_error_exit_code(result.error) == ErrorCode.ENV_ERROR


def test_from_config_uses_configured_binary(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import miniship.services.release.codepush as codepush

    seen: list[list[str]] = []

    def fake_run(
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        seen.append(cmd)
        return Ok("")

    monkeypatch.setattr(codepush, "run_process", fake_run)
    config = Config.from_dict({"codepush": {"binary": "node_modules/.bin/code-push"}})

    CodePushCli.from_config(config.codepush).release(tmp_path, "5.0.0", RELEASE)

    assert seen[0][0] == "node_modules/.bin/code-push"
