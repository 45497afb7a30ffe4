from __future__ import annotations

import shutil
from pathlib import Path

from miniship.core.config import CodePushConfig
from miniship.core.result import Err, Ok, Result
from miniship.platform.process import run as run_process
from miniship.services.release.errors import ReleaseError
from miniship.services.release.model import CodePushRelease

CODEPUSH_TIMEOUT_SECONDS = 600.0


def release_react_command(
    *, binary: str, target_version: str, options: CodePushRelease
) -> list[str]:
    cmd = [
        binary,
        "release-react",
        options.app_name,
        options.platform_name,
        "--targetBinaryVersion",
        target_version,
        "--deploymentName",
        options.deployment_name,
    ]
    if options.mandatory:
        cmd.append("--mandatory")
    if options.rollout_percentage is not None:
        cmd += ["--rollout", f"{options.rollout_percentage}%"]
    return cmd


class CodePushCli:
    """OTA release client driving the ``code-push`` command line tool.

    The release runs from the bundle directory; authentication is whatever
    session the binary already holds.
    """

    def __init__(self, binary: str = "code-push", *, timeout: float = CODEPUSH_TIMEOUT_SECONDS):
        self._binary = binary
        self._timeout = timeout

    @classmethod
    def from_config(
        cls, config: CodePushConfig, *, timeout: float = CODEPUSH_TIMEOUT_SECONDS
    ) -> CodePushCli:
        return cls(config.binary, timeout=timeout)

    def ensure_available(self) -> Result[str, ReleaseError]:
        path = shutil.which(self._binary)
        if path is None:
            return Err(
                ReleaseError(
                    kind="codepush_missing",
                    message=f"code-push binary not found: {self._binary}",
                    hint="Install code-push-cli or set [codepush] binary in miniship.toml",
                )
            )
        return Ok(path)

    def release(
        self, bundle_dir: Path, target_version: str, options: CodePushRelease
    ) -> Result[None, ReleaseError]:
        cmd = release_react_command(
            binary=self._binary, target_version=target_version, options=options
        )
        result = run_process(cmd, cwd=bundle_dir, timeout=self._timeout)
        if isinstance(result, Err):
            # -1: the process never started or timed out
            if result.error.returncode == -1:
                available = self.ensure_available()
                if isinstance(available, Err):
                    return available
            detail = result.error.stderr.strip() or result.error.stdout.strip()
            return Err(
                ReleaseError(
                    kind="release_failed",
                    message=f"CodePush release failed: {result.error}",
                    hint=detail or None,
                )
            )
        return Ok(None)
