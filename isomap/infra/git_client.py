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
# GIT INFRASTRUCTURE - DEPENDENCY FETCHER
# -----------------------------------------------------------------------------
# Responsibility: Fetch the resolver scripts from the upstream repository
# into a local working area.
# Uses subprocess for lean, direct git command execution.
#
# Features:
# - Shallow, blob-less, sparse clone (only the needed subtree is checked out)
# - Any stale copy is removed first, there is no incremental update
# - Every git command runs under its own timeout
# -----------------------------------------------------------------------------

import shutil
import subprocess
from pathlib import Path

from isomap.core import log
from isomap.core.config import GIT_TIMEOUT_SECONDS

# Files the resolver sources from the fetched subtree
REQUIRED_SCRIPTS = ("define.sh", "mido.sh")


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class FetchError(Exception):
    """Raised when the dependency repository could not be retrieved."""

    pass


class RepoFetcher:
    """
    Sparse checkout of a single subtree of a remote repository.
    """

    def __init__(
        self,
        repo_url: str,
        target_dir: str | Path,
        subtree: str = "src",
        timeout: float = GIT_TIMEOUT_SECONDS,
    ) -> None:
        """
        Args:
            repo_url: Clone URL of the upstream repository.
            target_dir: Local working-area path (replaced on every fetch).
            subtree: Directory to keep in the sparse checkout.
            timeout: Seconds allowed for each git command.
        """
        self._repo_url = repo_url
        self._target = Path(target_dir)
        self._subtree = subtree
        self._timeout = timeout

    @property
    def target_dir(self) -> Path:
        return self._target

    @property
    def subtree_path(self) -> Path:
        return self._target / self._subtree

    def _run(self, cmd: list, cwd: Path | None = None) -> subprocess.CompletedProcess:
        """
        Run a git command.

        Args:
            cmd: Command parts (e.g., ["git", "clone", ...])
            cwd: Working directory (defaults to the current one)

        Returns:
            CompletedProcess result

        Raises:
            GitError: On non-zero exit, timeout, or if git cannot be started
        """
        log.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            raise GitError(f"Git operation timed out ({self._timeout:g}s limit)")
        except (OSError, subprocess.SubprocessError) as e:
            raise GitError(f"Git subprocess error: {e}")

        if result.returncode != 0:
            error_msg = (result.stderr or result.stdout or "Unknown error").strip()
            raise GitError(f"Git command failed: {error_msg}")

        return result

    def remove(self) -> bool:
        """
        Delete the working area if present.

        Returns:
            True if something was removed.
        """
        if not (self._target.is_symlink() or self._target.exists()):
            return False
        if self._target.is_dir() and not self._target.is_symlink():
            shutil.rmtree(self._target)
        else:
            self._target.unlink()
        return True

    def fetch(self) -> Path:
        """
        Replace the working area with a fresh sparse checkout.

        Runs:
            git clone --depth 1 --filter=blob:none --sparse <repo> <dir>
            git sparse-checkout set <subtree>

        Returns:
            Path to the checked-out subtree.

        Raises:
            FetchError: If either step fails or the expected scripts are missing.
        """
        log.info(f"Downloading resolver code from {self._repo_url}...")

        if self._target.is_symlink() or self._target.exists():
            log.debug(f"Removing existing {self._target} directory")
            try:
                self.remove()
            except OSError as e:
                log.error(f"Failed to remove stale {self._target}")
                raise FetchError(f"Cannot remove stale {self._target}: {e}") from e

        try:
            self._run(
                [
                    "git", "clone", "--depth", "1", "--filter=blob:none", "--sparse",
                    self._repo_url, str(self._target),
                ]
            )
        except GitError as e:
            log.error("Failed to clone dependency repository")
            raise FetchError(f"Failed to clone {self._repo_url}: {e}") from e

        try:
            self._run(["git", "sparse-checkout", "set", self._subtree], cwd=self._target)
        except GitError as e:
            log.error(f"Failed to checkout {self._subtree} directory")
            raise FetchError(f"Failed to checkout {self._subtree}: {e}") from e

        missing = [name for name in REQUIRED_SCRIPTS if not (self.subtree_path / name).is_file()]
        if missing:
            log.error(f"Fetched subtree is missing: {', '.join(missing)}")
            raise FetchError(f"{self.subtree_path} lacks {', '.join(missing)}")

        log.info("Successfully downloaded resolver code")
        return self.subtree_path
