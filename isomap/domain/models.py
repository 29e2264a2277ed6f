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
# DOMAIN MODELS - RUN OPTIONS & RESOLUTION RESULTS
# -----------------------------------------------------------------------------
# RunOptions is what the CLI hands to the Lifecycle Controller.
# ResolutionResult is what the resolver hands back for a single version key.
# IsoMap is the ordered key -> URL document written at the end of a run.
#
# IsoMap keeps every requested key, duplicates included, in input order.
# -----------------------------------------------------------------------------

import json
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field, field_validator

DEFAULT_OUTPUT = "iso_map.json"
DEFAULT_VERSION_KEYS = ("11", "11l", "10", "10l")

# Written in place of a URL for any key that could not be resolved
NULL_SENTINEL = "null"


class RunOptions(BaseModel):
    """
    Parsed command line for a single run.

    An empty version_keys list is replaced by DEFAULT_VERSION_KEYS; keys are
    otherwise passed through untouched (unknown keys simply fail later).
    """

    output_path: str = Field(DEFAULT_OUTPUT, min_length=1, description="Output JSON file path")
    keep_intermediate: bool = Field(
        False, description="Keep the fetched dependency copy after the run"
    )
    debug: bool = Field(False, description="Enable [DEBUG] diagnostic lines")
    version_keys: list[str] = Field(
        default_factory=lambda: list(DEFAULT_VERSION_KEYS),
        description="Version keys to resolve, in output order",
    )

    @field_validator("version_keys")
    @classmethod
    def default_when_empty(cls, keys: list[str]) -> list[str]:
        return list(keys) if keys else list(DEFAULT_VERSION_KEYS)

    class Config:
        """Options are fixed once parsed."""

        frozen = True


class FailureReason(str, Enum):
    """
    Why a key could not be resolved.

    All reasons collapse to NULL_SENTINEL in the output; they only change
    how the failure is logged.
    """

    TIMEOUT = "timeout"
    ERROR = "error"  # the resolver called its error hook
    EXIT_CODE = "exit_code"
    EMPTY_URL = "empty_url"


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one version key: a URL, or a failure reason."""

    key: str
    url: str | None = None
    reason: FailureReason | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return bool(self.url)

    @property
    def value(self) -> str:
        """The string written to the map for this key."""
        return self.url if self.url else NULL_SENTINEL

    @classmethod
    def success(cls, key: str, url: str) -> "ResolutionResult":
        return cls(key=key, url=url)

    @classmethod
    def failure(
        cls, key: str, reason: FailureReason, detail: str | None = None
    ) -> "ResolutionResult":
        return cls(key=key, reason=reason, detail=detail)


class IsoMap:
    """
    Ordered version key -> URL document.

    Entries keep insertion order and duplicates. Rendering is textual: one
    "key": "value" line per entry between braces, values JSON-escaped.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[str, str]] = []

    def add(self, result: ResolutionResult) -> None:
        """Append a result; failed results are stored as NULL_SENTINEL."""
        self._entries.append((result.key, result.value))

    @property
    def entries(self) -> list[tuple[str, str]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def to_json(self) -> str:
        """Render the map as a JSON object, one entry per line."""
        if not self._entries:
            return "{}\n"

        lines = [
            f"  {json.dumps(key, ensure_ascii=False)}: {json.dumps(value, ensure_ascii=False)}"
            for key, value in self._entries
        ]
        return "{\n" + ",\n".join(lines) + "\n}\n"
