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
# LIFECYCLE CONTROLLER - RUN SEQUENCING
# -----------------------------------------------------------------------------
# Responsibility: fetch dependency -> build map -> write output -> cleanup.
#
# Cleanup sits in a finally block, so the working area is removed after a
# success, a failure, or an interrupt, unless the keep option is set.
#
# Exit codes: 0 when the map was written, 1 when the fetch or the write failed.
# -----------------------------------------------------------------------------

from collections.abc import Callable
from pathlib import Path

from isomap.core import log
from isomap.core.builder import MapBuilder, Resolver, WriteError
from isomap.core.config import Settings
from isomap.core.resolver import ResolverHooks, VersionResolver
from isomap.domain.models import RunOptions
from isomap.infra.git_client import FetchError, RepoFetcher

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class LifecycleController:
    """Owns the working area for one run and sequences the pipeline."""

    def __init__(
        self,
        options: RunOptions,
        settings: Settings,
        fetcher: RepoFetcher | None = None,
        resolver_factory: Callable[[Path], Resolver] | None = None,
    ) -> None:
        """
        Args:
            options: Parsed command line.
            settings: Environment settings (repository, timeouts, locale).
            fetcher: Dependency fetcher (built from settings if omitted).
            resolver_factory: Builds a resolver for the fetched scripts
                directory (VersionResolver if omitted).
        """
        self._options = options
        self._settings = settings
        self._fetcher = fetcher or RepoFetcher(
            settings.repo_url,
            settings.workdir_path,
            subtree=settings.subtree,
            timeout=settings.git_timeout,
        )
        self._resolver_factory = resolver_factory or self._default_resolver

    def _default_resolver(self, scripts_dir: Path) -> Resolver:
        hooks = ResolverHooks(language=self._settings.language, culture=self._settings.culture)
        return VersionResolver(
            scripts_dir,
            hooks=hooks,
            platform=self._settings.platform,
            timeout=self._settings.timeout,
        )

    def cleanup(self) -> None:
        """Remove the working area unless asked to keep it."""
        if self._options.keep_intermediate:
            log.info(f"Keeping intermediate files in {self._fetcher.target_dir}")
            return

        target = self._fetcher.target_dir
        if not (target.is_symlink() or target.exists()):
            return

        log.info("Cleaning up intermediate files...")
        try:
            self._fetcher.remove()
        except OSError as e:
            log.warn(f"Could not remove {self._fetcher.target_dir}: {e}")

    def run(self) -> int:
        """
        Execute one full run.

        Returns:
            EXIT_SUCCESS if the map was written, EXIT_FAILURE otherwise.
        """
        try:
            scripts_dir = self._fetcher.fetch()
            builder = MapBuilder(self._resolver_factory(scripts_dir))
            builder.generate(self._options.version_keys, self._options.output_path)
        except FetchError as e:
            log.error(str(e))
            log.error("ISO map generation failed")
            return EXIT_FAILURE
        except WriteError as e:
            log.error(str(e))
            log.error("ISO map generation failed")
            return EXIT_FAILURE
        finally:
            self.cleanup()

        log.info("ISO map generation completed successfully")
        return EXIT_SUCCESS
