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
# DIAGNOSTIC LOG - SEVERITY-TAGGED CONSOLE OUTPUT
# -----------------------------------------------------------------------------
# Responsibility: All progress and failure reporting goes through here.
# Lines are tagged [INFO] / [WARN] / [ERROR] / [DEBUG] and written to stderr
# so that stdout stays free for the generated document.
#
# [DEBUG] lines are suppressed until enable_debug() is called.
# -----------------------------------------------------------------------------

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)

_debug_enabled = False


def enable_debug(enabled: bool = True) -> None:
    """Turn [DEBUG] output on or off for the rest of the process."""
    global _debug_enabled
    _debug_enabled = enabled


def is_debug_enabled() -> bool:
    return _debug_enabled


def info(message: str) -> None:
    console.print(f"[cyan][INFO] {escape(message)}[/cyan]")


def warn(message: str) -> None:
    console.print(f"[yellow][WARN] {escape(message)}[/yellow]")


def error(message: str) -> None:
    console.print(f"[bold red][ERROR] {escape(message)}[/bold red]")


def debug(message: str) -> None:
    if _debug_enabled:
        console.print(f"[dim][DEBUG] {escape(message)}[/dim]")
