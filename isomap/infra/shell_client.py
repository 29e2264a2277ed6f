# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# SHELL INFRASTRUCTURE - ISOLATED BASH EXECUTION
# -----------------------------------------------------------------------------
# Responsibility: Run one bash script in its own child process and session,
# with a hard wall-clock limit.
#
# Safety Features:
# - Fresh process per call: nothing the script defines survives it
# - New session: on timeout the whole process group is killed, including
#   any curl/wget the script spawned
# - stdin is closed so a script can never block waiting for input
# -----------------------------------------------------------------------------

import os
import signal
import subprocess
import time
from dataclasses import dataclass


class ShellError(Exception):
    """Raised when the shell itself cannot be started."""

    pass


@dataclass
class ShellResult:
    """Captured outcome of an isolated script run."""

    exit_code: int | None  # None when the run was killed on timeout
    stdout: str
    stderr: str
    timed_out: bool = False
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return not self.timed_out and self.exit_code == 0


class IsolatedShell:
    """Executes bash scripts in throwaway child processes."""

    def __init__(self, executable: str = "bash") -> None:
        self._executable = executable

    def _kill_group(self, proc: subprocess.Popen) -> None:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            # Leader already gone; make sure the direct child is reaped
            proc.kill()

    def run(
        self,
        script: str,
        timeout: float,
        env: dict[str, str] | None = None,
    ) -> ShellResult:
        """
        Run a script and wait at most `timeout` seconds for it.

        Args:
            script: Bash source passed to `bash -c`.
            timeout: Wall-clock budget in seconds.
            env: Full environment for the child (None inherits ours).

        Returns:
            ShellResult. A timeout is reported via `timed_out`, not raised.

        Raises:
            ShellError: If the shell executable cannot be started.
        """
        start = time.monotonic()
        try:
            proc = subprocess.Popen(
                [self._executable, "-c", script],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                env=env,
                start_new_session=True,
            )
        except OSError as e:
            raise ShellError(f"Cannot start {self._executable}: {e}") from e

        try:
            stdout, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            self._kill_group(proc)
            stdout, stderr = proc.communicate()
            return ShellResult(
                exit_code=None,
                stdout=stdout or "",
                stderr=stderr or "",
                timed_out=True,
                duration_seconds=time.monotonic() - start,
            )
        except BaseException:
            # Interrupted (Ctrl-C / SIGTERM): do not leave the child running
            self._kill_group(proc)
            proc.wait()
            raise

        return ShellResult(
            exit_code=proc.returncode,
            stdout=stdout or "",
            stderr=stderr or "",
            duration_seconds=time.monotonic() - start,
        )
