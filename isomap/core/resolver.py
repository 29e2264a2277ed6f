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
# VERSION RESOLVER - EXTERNAL RESOLUTION ADAPTER
# -----------------------------------------------------------------------------
# Responsibility: Turn one version key into a download URL by running the
# upstream shell logic (define.sh + mido.sh) in an isolated bash process.
#
# Flow inside the child:
#   VERSION=<key> -> parseVersion (e.g. 11l -> win11x64-enterprise-ltsc-eval)
#   -> getWindows "$VERSION" <culture> <description> -> $MIDO_URL
#
# The upstream scripts expect a host environment providing info/warn/error/
# html/getLanguage. ResolverHooks renders stand-ins for those into the
# script preamble. Only the error hook stops anything, and it only exits the
# child, never the run.
# -----------------------------------------------------------------------------

import os
import shlex
from dataclasses import dataclass
from pathlib import Path

from isomap.core import log
from isomap.core.config import TIMEOUT_SECONDS
from isomap.domain.models import FailureReason, ResolutionResult
from isomap.infra.shell_client import IsolatedShell, ShellError

# Printed by the child right before it exits successfully
URL_MARKER = "ISO_MAP_URL="
ERROR_PREFIX = "ERROR: "
RELAYED_PREFIXES = ("[INFO] ", "[WARN] ")


@dataclass(frozen=True)
class ResolverHooks:
    """
    Host functions the upstream scripts call into.

    language/culture answer getLanguage lookups; description is passed to
    getWindows as the product description.
    """

    language: str = "English"
    culture: str = "en-US"
    description: str = "Windows"

    def render(self) -> str:
        """Shell function definitions for the child preamble."""
        language = shlex.quote(self.language)
        culture = shlex.quote(self.culture)
        return f"""\
info() {{ echo "[INFO] $*" >&2; }}
warn() {{ echo "[WARN] $*" >&2; }}
html() {{ :; }}
error() {{ echo "{ERROR_PREFIX}$*" >&2; exit 1; }}
getLanguage() {{
    case "$2" in
        "name"|"desc") echo {language} ;;
        "culture") echo {culture} ;;
    esac
}}
"""


class VersionResolver:
    """
    Resolves version keys one at a time, each in a fresh bash process.

    Nothing is reused between keys: the scripts are sourced again for every
    call so their global variables start clean.
    """

    def __init__(
        self,
        scripts_dir: str | Path,
        hooks: ResolverHooks | None = None,
        platform: str = "x64",
        timeout: float = TIMEOUT_SECONDS,
        shell: IsolatedShell | None = None,
    ) -> None:
        """
        Args:
            scripts_dir: Directory containing define.sh and mido.sh.
            hooks: Host function stand-ins (defaults to English / en-US).
            platform: Architecture handed to the resolver.
            timeout: Seconds allowed per key.
            shell: Runner for the child process.
        """
        self._scripts_dir = Path(scripts_dir)
        self._hooks = hooks or ResolverHooks()
        self._platform = platform
        self._timeout = timeout
        self._shell = shell or IsolatedShell()

    def build_script(self) -> str:
        """
        Full child script. The key and scripts path arrive via the
        environment (ISO_MAP_KEY, ISO_MAP_SCRIPTS) so they need no quoting.
        """
        culture = shlex.quote(self._hooks.culture)
        description = shlex.quote(self._hooks.description)
        platform = shlex.quote(self._platform)
        return (
            self._hooks.render()
            + f"""\
VERSION="$ISO_MAP_KEY"
source "$ISO_MAP_SCRIPTS/define.sh" || exit 1
source "$ISO_MAP_SCRIPTS/mido.sh" || exit 1
MIDO_URL=""
parseVersion
PLATFORM={platform}
getWindows "$VERSION" {culture} {description} || exit 1
echo "{URL_MARKER}${{MIDO_URL:-}}"
"""
        )

    def _child_env(self, key: str) -> dict[str, str]:
        env = dict(os.environ)
        env.update(
            {
                "ISO_MAP_KEY": key,
                "ISO_MAP_SCRIPTS": str(self._scripts_dir.resolve()),
                "DEBUG": "1" if log.is_debug_enabled() else "",
                "VERIFY": "",
                "TMP": "",
            }
        )
        return env

    @staticmethod
    def _extract_url(stdout: str) -> str:
        for line in reversed(stdout.splitlines()):
            if line.startswith(URL_MARKER):
                return line[len(URL_MARKER):].strip()
        return ""

    @staticmethod
    def _extract_error(stderr: str) -> str | None:
        messages = [
            line[len(ERROR_PREFIX):].strip()
            for line in stderr.splitlines()
            if line.startswith(ERROR_PREFIX)
        ]
        return "; ".join(messages) if messages else None

    def _relay(self, key: str, stderr: str) -> None:
        for line in stderr.splitlines():
            if line.startswith(RELAYED_PREFIXES):
                log.debug(f"[{key}] {line}")

    def resolve(self, key: str) -> ResolutionResult:
        """
        Resolve a single version key.

        Returns:
            A successful result with the URL, or a failed one whose reason
            tells timeout, error hook, non-zero exit and empty URL apart.
        """
        try:
            result = self._shell.run(
                self.build_script(), timeout=self._timeout, env=self._child_env(key)
            )
        except ShellError as e:
            return ResolutionResult.failure(key, FailureReason.ERROR, str(e))

        self._relay(key, result.stderr)
        log.debug(f"[{key}] child finished in {result.duration_seconds:.1f}s")

        if result.timed_out:
            return ResolutionResult.failure(
                key, FailureReason.TIMEOUT, f"no answer within {self._timeout:g}s"
            )

        url = self._extract_url(result.stdout)
        if result.succeeded and url:
            return ResolutionResult.success(key, url)

        payload = self._extract_error(result.stderr)
        if payload:
            return ResolutionResult.failure(key, FailureReason.ERROR, payload)
        if result.exit_code != 0:
            return ResolutionResult.failure(
                key, FailureReason.EXIT_CODE, f"exit code: {result.exit_code}"
            )
        return ResolutionResult.failure(key, FailureReason.EMPTY_URL)
