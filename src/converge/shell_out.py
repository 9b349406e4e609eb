"""
Process helpers for concrete providers.

Providers inspect and mutate the system through these helpers. By default
commands run under the C locale so output parsing is stable; use
shell_out_with_systems_locale() when the command output is shown to users.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

import structlog

from converge.config import get_settings
from converge.core.errors import CommandFailedError

logger = structlog.get_logger()

Command = str | Sequence[str]


@dataclass
class CommandResult:
    """Outcome of a finished command."""

    command: Command
    exitstatus: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.exitstatus == 0

    def error(self) -> None:
        """Raise CommandFailedError if the command exited non-zero."""
        if self.success:
            return
        raise CommandFailedError(
            f"Command failed with exit status {self.exitstatus}: {_display(self.command)}",
            details={"exitstatus": self.exitstatus, "stderr": self.stderr.strip()},
        )


def _display(command: Command) -> str:
    if isinstance(command, str):
        return command
    return " ".join(command)


def run_command(
    command: Command,
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | str | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    String commands go through the shell; sequences are executed directly.
    Timeouts propagate as subprocess.TimeoutExpired.
    """
    if timeout is None:
        timeout = get_settings().shell_timeout
    merged_env = dict(os.environ)
    if env:
        merged_env.update(env)

    logger.debug("shell_out", command=_display(command), cwd=str(cwd) if cwd else None)
    proc = subprocess.run(
        command,
        shell=isinstance(command, str),
        capture_output=True,
        text=True,
        env=merged_env,
        cwd=cwd,
        timeout=timeout,
    )
    return CommandResult(
        command=command,
        exitstatus=proc.returncode,
        stdout=proc.stdout,
        stderr=proc.stderr,
    )


class ShellOut:
    """Mixin giving providers shell_out helpers."""

    def shell_out(
        self,
        command: Command,
        *,
        env: Mapping[str, str] | None = None,
        cwd: Path | str | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run a command under LC_ALL=C unless env sets LC_ALL itself."""
        env = {"LC_ALL": "C", **(env or {})}
        return run_command(command, env=env, cwd=cwd, timeout=timeout)

    def shell_out_checked(
        self,
        command: Command,
        *,
        env: Mapping[str, str] | None = None,
        cwd: Path | str | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        result = self.shell_out(command, env=env, cwd=cwd, timeout=timeout)
        result.error()
        return result

    def shell_out_with_systems_locale(
        self,
        command: Command,
        *,
        env: Mapping[str, str] | None = None,
        cwd: Path | str | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        return run_command(command, env=env, cwd=cwd, timeout=timeout)
