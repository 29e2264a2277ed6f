"""
Pytest configuration and fixtures for ISO map tests.
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from isomap.core import log  # noqa: E402
from isomap.infra.git_client import RepoFetcher  # noqa: E402

# Stand-in for the upstream define.sh: short key -> long-form identifier
FAKE_DEFINE_SH = r"""
parseVersion() {
    case "${VERSION,,}" in
        "11") VERSION="win11x64" ;;
        "11l") VERSION="win11x64-enterprise-ltsc-eval" ;;
        "10") VERSION="win10x64" ;;
        "10l") VERSION="win10x64-enterprise-ltsc-eval" ;;
        "slow" | "empty" | "crash" | "chatty") VERSION="${VERSION,,}" ;;
        *) error "Invalid VERSION specified, value \"$VERSION\" is not recognized!" ;;
    esac
}
"""

# Stand-in for the upstream mido.sh: long-form identifier -> $MIDO_URL.
# RESOLVE_COUNT would grow if state leaked from one key to the next.
FAKE_MIDO_SH = r"""
getWindows() {
    local version="$1"
    local lang="$2"
    local desc="$3"
    local culture
    culture=$(getLanguage "$lang" "culture")
    RESOLVE_COUNT=$(( ${RESOLVE_COUNT:-0} + 1 ))

    case "$version" in
        "slow") sleep 30 ;;
        "empty") return 0 ;;
        "crash") return 3 ;;
        "chatty")
            info "Requesting $desc download link"
            warn "Falling back to the evaluation center"
            html "ignored"
            MIDO_URL="https://software.example.com/chatty.iso"
            ;;
        *)
            MIDO_URL="https://software.example.com/${version}_${culture}_${PLATFORM}.iso?n=${RESOLVE_COUNT}"
            ;;
    esac
}
"""


def write_fake_scripts(scripts_dir: Path) -> Path:
    """Create a fake upstream subtree (define.sh + mido.sh)."""
    scripts_dir.mkdir(parents=True, exist_ok=True)
    (scripts_dir / "define.sh").write_text(FAKE_DEFINE_SH)
    (scripts_dir / "mido.sh").write_text(FAKE_MIDO_SH)
    return scripts_dir


class FakeFetcher(RepoFetcher):
    """RepoFetcher that writes the fake scripts instead of cloning."""

    def fetch(self) -> Path:
        if self.target_dir.exists():
            self.remove()
        return write_fake_scripts(self.subtree_path)


class FailingFetcher(RepoFetcher):
    """RepoFetcher whose clone always fails after creating the directory."""

    def fetch(self) -> Path:
        from isomap.infra.git_client import FetchError

        self.target_dir.mkdir(parents=True, exist_ok=True)
        raise FetchError("Failed to clone https://example.invalid/repo.git: offline")


@pytest.fixture(autouse=True)
def reset_debug():
    """Debug logging is process-wide; start every test with it off."""
    log.enable_debug(False)
    yield
    log.enable_debug(False)


@pytest.fixture
def clean_env():
    """Environment without DEBUG or ISO_MAP_* overrides (restored afterwards)."""
    with patch.dict(os.environ, {}, clear=False):
        for name in list(os.environ):
            if name == "DEBUG" or name.startswith("ISO_MAP_"):
                del os.environ[name]
        yield os.environ


@pytest.fixture
def fake_scripts(tmp_path):
    """A fake upstream subtree in a temporary directory."""
    return write_fake_scripts(tmp_path / "dockur_code" / "src")


@pytest.fixture
def workdir(tmp_path, monkeypatch, clean_env):
    """Run from an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
