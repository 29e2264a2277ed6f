# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains low-level process wrappers:
# - RepoFetcher: Sparse git checkout of the resolver scripts
# - IsolatedShell: Time-boxed bash execution in a fresh process group
# -----------------------------------------------------------------------------

from .git_client import FetchError, GitError, RepoFetcher
from .shell_client import IsolatedShell, ShellError, ShellResult

__all__ = [
    "FetchError", "GitError", "RepoFetcher",
    "IsolatedShell", "ShellError", "ShellResult",
]
