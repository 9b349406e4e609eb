"""Tests for shell_out.py."""

import subprocess
import sys

import pytest
from converge.core.errors import CommandFailedError
from converge.shell_out import CommandResult, ShellOut, run_command

PRINT_LOCALE = [sys.executable, "-c", "import os; print(os.environ.get('LC_ALL', ''))"]


class TestRunCommand:
    """Tests for run_command."""

    def test_captures_output(self):
        """Test stdout, stderr and exit status are captured."""
        result = run_command(
            [sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"]
        )

        assert result.stdout.strip() == "out"
        assert result.stderr.strip() == "err"
        assert result.exitstatus == 3
        assert not result.success

    def test_timeout_propagates(self):
        """Test a timeout raises rather than returning a result."""
        with pytest.raises(subprocess.TimeoutExpired):
            run_command([sys.executable, "-c", "import time; time.sleep(5)"], timeout=0.2)

    def test_cwd(self, tmp_path):
        """Test commands run in the requested directory."""
        result = run_command([sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path)

        assert result.stdout.strip() == str(tmp_path.resolve())


class TestCommandResult:
    """Tests for CommandResult.error."""

    def test_error_on_success_is_noop(self):
        """Test error() does nothing for exit status 0."""
        CommandResult(command="true", exitstatus=0, stdout="", stderr="").error()

    def test_error_raises(self):
        """Test error() raises CommandFailedError with details."""
        result = CommandResult(command=["false", "-x"], exitstatus=1, stdout="", stderr="nope\n")

        with pytest.raises(CommandFailedError) as exc_info:
            result.error()

        assert "false -x" in exc_info.value.message
        assert exc_info.value.details == {"exitstatus": 1, "stderr": "nope"}


class TestShellOutMixin:
    """Tests for the ShellOut helpers."""

    def test_shell_out_forces_c_locale(self):
        """Test shell_out runs under LC_ALL=C."""
        assert ShellOut().shell_out(PRINT_LOCALE).stdout.strip() == "C"

    def test_shell_out_env_overrides_locale(self):
        """Test an explicit LC_ALL wins."""
        result = ShellOut().shell_out(PRINT_LOCALE, env={"LC_ALL": "POSIX"})

        assert result.stdout.strip() == "POSIX"

    def test_systems_locale_is_untouched(self, monkeypatch):
        """Test shell_out_with_systems_locale keeps the caller's locale."""
        monkeypatch.setenv("LC_ALL", "en_US.UTF-8")

        result = ShellOut().shell_out_with_systems_locale(PRINT_LOCALE)

        assert result.stdout.strip() == "en_US.UTF-8"

    def test_shell_out_checked_raises(self):
        """Test shell_out_checked raises on non-zero exit."""
        with pytest.raises(CommandFailedError):
            ShellOut().shell_out_checked([sys.executable, "-c", "raise SystemExit(2)"])

    def test_shell_out_checked_returns_result(self):
        """Test shell_out_checked returns the result on success."""
        result = ShellOut().shell_out_checked([sys.executable, "-c", "print('ok')"])

        assert result.stdout.strip() == "ok"
