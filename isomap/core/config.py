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
# CONFIGURATION - ENVIRONMENT SETTINGS
# -----------------------------------------------------------------------------
# Responsibility: Read run settings from the environment (and an optional
# .env file in the working directory) into a validated, frozen model.
#
# Real environment variables always win over .env entries.
# -----------------------------------------------------------------------------

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

# Upstream resolution logic (define.sh + mido.sh live under src/)
DOCKUR_REPO = "https://github.com/dockur/windows.git"
DOCKUR_SUBTREE = "src"
DOCKUR_DIR = "dockur_code"

TIMEOUT_SECONDS = 60  # per version key
GIT_TIMEOUT_SECONDS = 120  # per git command


class ConfigError(Exception):
    """Raised when an environment setting has an invalid value."""

    pass


class Settings(BaseModel):
    """Run settings. Field names mirror the ISO_MAP_* environment variables."""

    repo_url: str = Field(DOCKUR_REPO, min_length=1)
    subtree: str = Field(DOCKUR_SUBTREE, min_length=1)
    workdir: str = Field(DOCKUR_DIR, min_length=1)
    timeout: float = Field(TIMEOUT_SECONDS, gt=0)
    git_timeout: float = Field(GIT_TIMEOUT_SECONDS, gt=0)
    platform: str = Field("x64", min_length=1)
    language: str = Field("English", min_length=1)
    culture: str = Field("en-US", min_length=1)
    debug: bool = False

    class Config:
        """Settings are read once per run."""

        frozen = True
        str_strip_whitespace = True

    @property
    def workdir_path(self) -> Path:
        return Path(self.workdir)


# Environment variable -> Settings field
_ENV_FIELDS = {
    "ISO_MAP_REPO": "repo_url",
    "ISO_MAP_SUBTREE": "subtree",
    "ISO_MAP_WORKDIR": "workdir",
    "ISO_MAP_TIMEOUT": "timeout",
    "ISO_MAP_GIT_TIMEOUT": "git_timeout",
    "ISO_MAP_PLATFORM": "platform",
    "ISO_MAP_LANGUAGE": "language",
    "ISO_MAP_CULTURE": "culture",
}


def load_settings(env_file: str | Path | None = ".env") -> Settings:
    """
    Build Settings from the process environment.

    Args:
        env_file: Optional dotenv file to load first (never overrides
            variables that are already set). None skips it.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If a variable fails validation (e.g. ISO_MAP_TIMEOUT=abc).
    """
    if env_file is not None and Path(env_file).is_file():
        load_dotenv(env_file, override=False)

    values: dict = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            values[field_name] = raw

    # Any non-empty DEBUG turns debug logging on
    values["debug"] = bool(os.getenv("DEBUG", ""))

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
