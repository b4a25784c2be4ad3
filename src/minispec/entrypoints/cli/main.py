"""minispec CLI entry point.

Defines the top-level ``minispec`` command (via Click-Extra), which sets up
logging for every subcommand, and registers the subcommands.

Available commands
- ``minispec run TARGET``: run a suite and report on the console.

Examples
    $ minispec --version
    $ minispec -v run tests.arith:suite --shuffle
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from minispec import __version__
from minispec.logging import (
    config_console_handler,
    config_flight_recorder,
    configure_logging,
    log_startup,
)

from .helpers import parse_log_level
from .run import run as run_command

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """minispec command-line interface.

    minispec runs suites of event-driven unit tests. Each test records its
    assertions as events; the suite runs the tests one at a time and a
    console reporter prints what happens.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Increase the default WARNING verbosity by one level per repetition.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Decrease the default WARNING verbosity by one level per repetition.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug mode (DEBUG console output with logger names and sources).",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path(user_log_dir("minispec", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="MINISPEC_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="MINISPEC_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    show_envvar=True,
    help=(
        "Keep the last log records at DEBUG granularity (unaffected by -v/-q) and "
        "write them to --log-path when a WARNING or ERROR is logged, or on exit "
        "with --force-flush."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    default=False,
    show_default=True,
    envvar="MINISPEC_FORCE_FLUSH_FLIGHT_RECORDER",
    show_envvar=True,
    help="Write the flight recorder buffer to --log-path on exit.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    default=("asyncio=WARNING",),
    show_default=True,
    help=(
        "Set the minimum LEVEL of a logger NAME (NAME=LEVEL), for both console "
        "and flight recorder. Repeatable, e.g. -L minispec.domain=DEBUG."
    ),
)
@clickx.pass_context
def minispec(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """minispec command-line interface."""

    # 0) effective console verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    # 1) console handler, color follows click-extra's --color/--no-color
    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]

    # 2) flight recorder
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 3) root logger and per-logger levels
    configure_logging(level=level, handlers=handlers, logger_levels=logger_levels)

    log_startup(
        logger,
        app_version=__version__,
        level=logging.DEBUG if debug else level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    # 4) flush and close handlers once the subcommand returns
    ctx.call_on_close(logging.shutdown)


minispec.add_command(run_command, name="run")
