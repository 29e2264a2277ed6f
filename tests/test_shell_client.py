"""
Tests for isolated bash execution.
"""

import time

import pytest

from isomap.infra.shell_client import IsolatedShell, ShellError, ShellResult


class TestIsolatedShell:
    """Tests for IsolatedShell.run."""

    def test_captures_output_and_exit_code(self):
        """stdout, stderr and the exit code are returned."""
        result = IsolatedShell().run("echo out; echo err >&2; exit 3", timeout=10)
        assert result.stdout == "out\n"
        assert result.stderr == "err\n"
        assert result.exit_code == 3
        assert not result.timed_out
        assert not result.succeeded

    def test_environment_is_passed(self):
        """The given environment is visible to the script."""
        result = IsolatedShell().run('echo "$GREETING"', timeout=10, env={"GREETING": "hi"})
        assert result.stdout.strip() == "hi"
        assert result.succeeded

    def test_timeout_kills_process_group(self):
        """A hanging script, and the children it spawned, are killed on timeout."""
        start = time.monotonic()
        result = IsolatedShell().run("echo started; sleep 30 & sleep 30; wait", timeout=1)
        elapsed = time.monotonic() - start

        assert result.timed_out
        assert result.exit_code is None
        assert not result.succeeded
        assert "started" in result.stdout
        assert elapsed < 10

    def test_stdin_is_closed(self):
        """A script reading stdin sees EOF instead of blocking."""
        result = IsolatedShell().run("read -r line || echo eof", timeout=5)
        assert result.stdout.strip() == "eof"

    def test_missing_shell(self):
        """An unknown shell executable raises ShellError."""
        with pytest.raises(ShellError):
            IsolatedShell("definitely-not-a-shell-iso-map").run("true", timeout=5)


class TestShellResult:
    """Tests for ShellResult."""

    def test_succeeded_requires_zero_exit(self):
        """Only exit code 0 without timeout counts as success."""
        assert ShellResult(exit_code=0, stdout="", stderr="").succeeded
        assert not ShellResult(exit_code=1, stdout="", stderr="").succeeded
        assert not ShellResult(exit_code=None, stdout="", stderr="", timed_out=True).succeeded
