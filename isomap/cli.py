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
# COMMAND LINE - OPTION RESOLVER & ENTRY POINT
# -----------------------------------------------------------------------------
# Responsibility: Turn argv into RunOptions and hand over to the Lifecycle
# Controller.
#
# Any usage problem (unknown option, -o without a value) prints the error
# followed by the full usage text and exits 1.
# -----------------------------------------------------------------------------

import signal
from contextlib import contextmanager

import click

from isomap.core import log
from isomap.core.config import ConfigError, load_settings
from isomap.core.lifecycle import EXIT_FAILURE, LifecycleController
from isomap.domain.models import DEFAULT_OUTPUT, DEFAULT_VERSION_KEYS, RunOptions

EXIT_INTERRUPTED = 130

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

EPILOG = f"""
\b
VERSION KEYS (default: {' '.join(DEFAULT_VERSION_KEYS)}):
    11   - Windows 11 (latest)
    11l  - Windows 11 LTSC
    10   - Windows 10 (latest)
    10l  - Windows 10 LTSC

\b
EXAMPLES:
    update-iso-map                                # default keys
    update-iso-map 11 10                          # specific versions
    update-iso-map --output custom_map.json --keep
    update-iso-map --debug 11 11l

\b
ENVIRONMENT:
    DEBUG=1 is the same as --debug. ISO_MAP_REPO, ISO_MAP_WORKDIR,
    ISO_MAP_TIMEOUT, ISO_MAP_PLATFORM and ISO_MAP_CULTURE override the
    defaults (a .env file in the current directory is read too).
"""


class UsageCommand(click.Command):
    """Click command that shows the full usage on any syntax error and exits 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            click.echo(f"Error: {e.format_message()}", err=True)
            click.echo("", err=True)
            click.echo(ctx.get_help(), err=True)
            ctx.exit(EXIT_FAILURE)


def _require_value(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not value or not value.strip():
        raise click.BadParameter("must not be empty", ctx=ctx, param=param)
    return value


@contextmanager
def _sigterm_as_exit():
    """Route SIGTERM through SystemExit so finally blocks (cleanup) still run."""

    def _handler(signum, frame):
        raise SystemExit(128 + signum)

    previous = signal.signal(signal.SIGTERM, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


@click.command(cls=UsageCommand, context_settings=CONTEXT_SETTINGS, epilog=EPILOG)
@click.option(
    "-o",
    "--output",
    "output_path",
    default=DEFAULT_OUTPUT,
    show_default=True,
    metavar="FILE",
    callback=_require_value,
    help="Output JSON file path.",
)
@click.option("-k", "--keep", is_flag=True, help="Keep intermediate files (fetched repository).")
@click.option("-d", "--debug", is_flag=True, help="Enable debug logging.")
@click.argument("version_keys", nargs=-1, metavar="[VERSION_KEYS]...")
@click.pass_context
def cli(ctx: click.Context, output_path: str, keep: bool, debug: bool, version_keys: tuple):
    """
    Generate a JSON mapping of Windows ISO version keys to download URLs
    using the dockur repository resolution logic.
    """
    try:
        settings = load_settings()
    except ConfigError as e:
        log.error(str(e))
        ctx.exit(EXIT_FAILURE)

    debug = debug or settings.debug
    log.enable_debug(debug)

    options = RunOptions(
        output_path=output_path,
        keep_intermediate=keep,
        debug=debug,
        version_keys=list(version_keys),
    )
    if version_keys:
        log.info(f"Using custom version keys: {' '.join(options.version_keys)}")
    else:
        log.debug(f"Using default version keys: {' '.join(options.version_keys)}")

    with _sigterm_as_exit():
        try:
            exit_code = LifecycleController(options, settings).run()
        except KeyboardInterrupt:
            log.warn("Interrupted")
            exit_code = EXIT_INTERRUPTED

    ctx.exit(exit_code)


def main() -> None:
    """Console script entry point."""
    cli(prog_name="update-iso-map")
