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
# MAP BUILDER - ISO MAP ASSEMBLY
# -----------------------------------------------------------------------------
# Responsibility: Resolve every requested key, strictly in order and one at
# a time, and write the resulting document in a single write.
#
# A key that fails is never dropped: it is written as "null" and the run
# moves on to the next key.
# -----------------------------------------------------------------------------

from pathlib import Path
from typing import Protocol

from rich.console import Console

from isomap.core import log
from isomap.domain.models import FailureReason, IsoMap, ResolutionResult

# The generated document is echoed here, separate from diagnostics
output_console = Console(highlight=False, soft_wrap=True, emoji=False)


class WriteError(Exception):
    """Raised when the output file cannot be written."""

    pass


class Resolver(Protocol):
    """Anything that turns a version key into a ResolutionResult."""

    def resolve(self, key: str) -> ResolutionResult: ...


def report(result: ResolutionResult) -> None:
    """Log one key's outcome with the severity its failure deserves."""
    if result.ok:
        log.debug(f"Resolved {result.key} -> {result.url}")
    elif result.reason == FailureReason.ERROR:
        log.error(f"Failed to resolve {result.key}: {result.detail}")
    elif result.reason == FailureReason.TIMEOUT:
        log.warn(f"Timed out resolving {result.key} ({result.detail}), setting to null")
    elif result.reason == FailureReason.EXIT_CODE:
        log.warn(f"Failed to resolve {result.key} ({result.detail}), setting to null")
    else:
        log.warn(f"No URL returned for {result.key}, setting to null")


class MapBuilder:
    """Builds and writes the ISO map for an ordered list of version keys."""

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver

    def build(self, version_keys: list[str]) -> IsoMap:
        """Resolve each key in input order; duplicates are resolved again."""
        iso_map = IsoMap()
        for key in version_keys:
            log.info(f"Resolving version key: {key}")
            result = self._resolver.resolve(key)
            report(result)
            iso_map.add(result)
        return iso_map

    def write(self, iso_map: IsoMap, output_path: str | Path) -> Path:
        """
        Write the document, replacing any existing file.

        Raises:
            WriteError: If the path cannot be written (missing directory,
                permissions, path is a directory, ...).
        """
        path = Path(output_path)
        document = iso_map.to_json()
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(document)
        except OSError as e:
            raise WriteError(f"Cannot write {path}: {e.strerror or e}") from e

        log.info(f"Generated {path}:")
        output_console.print(document, end="", markup=False)
        return path

    def generate(self, version_keys: list[str], output_path: str | Path) -> IsoMap:
        """Build the map and write it to output_path."""
        log.info("Generating ISO URL map...")
        iso_map = self.build(version_keys)
        self.write(iso_map, output_path)
        return iso_map
