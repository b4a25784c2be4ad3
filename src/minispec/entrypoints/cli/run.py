"""``minispec run``: run a suite and report on the console.

The reporter writes to stdout; the closing verdict and diagnostics go to
stderr.

Exit status
- ``0``: every test passed.
- ``1``: at least one failure or error, or the suite did not complete
  within ``--timeout``.
- ``2``: usage error, including a target that cannot be loaded.
"""

from __future__ import annotations

import logging
import random
import threading
from pathlib import Path

import click
from rich.console import Console

from minispec.adapters.reporters import ConsoleReporter
from minispec.adapters.schedulers import SCHEDULERS
from minispec.config import SCHEDULER_ENV_VAR, build_config
from minispec.domain.events import COMPLETE
from minispec.errors import TargetLoadError, UnknownSchedulerError

from .helpers import error, load_target, success, warn

logger = logging.getLogger(__name__)


@click.command()
@click.argument("target")
@click.option(
    "--scheduler",
    type=click.Choice(sorted(SCHEDULERS), case_sensitive=False),
    default=None,
    help=f"How tests are started. Defaults to ${SCHEDULER_ENV_VAR}, else trampoline.",
)
@click.option(
    "--shuffle/--no-shuffle",
    default=False,
    show_default=True,
    help="Run the tests in random order.",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for --shuffle, to reproduce an order. Printed when not given.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds to wait for the suite to complete. Waits forever by default.",
)
@click.option(
    "-I",
    "--import-path",
    "import_paths",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to import TARGET from (repeatable).",
)
@click.option(
    "--show-assertions/--hide-assertions",
    default=False,
    show_default=True,
    help="Also print passed assertions.",
)
@click.pass_context
def run(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    target: str,
    scheduler: str | None,
    shuffle: bool,
    seed: int | None,
    timeout: float | None,
    import_paths: tuple[Path, ...],
    show_assertions: bool,
) -> None:
    """Run the suite named by TARGET (``module`` or ``module:attribute``)."""
    try:
        config = build_config(scheduler)
    except UnknownSchedulerError as e:
        raise click.BadParameter(str(e), param_hint=f"${SCHEDULER_ENV_VAR}") from e

    try:
        suite = load_target(target, config, import_paths)
    except TargetLoadError as e:
        raise click.BadParameter(str(e), param_hint="TARGET") from e

    if shuffle:
        if seed is None:
            seed = random.randrange(2**32)
        click.echo(f"Shuffling with --seed {seed}", err=True)
        suite.shuffle(random.Random(seed))

    if not suite.test_count:
        warn(f"Suite {suite.name!r} has no tests.")

    console = Console(
        color_system="auto" if ctx.color is not False else None, highlight=False
    )
    ConsoleReporter(console, verbose=show_assertions).attach(suite)

    finished = threading.Event()
    suite.once(COMPLETE, lambda event: finished.set())
    logger.info("Running %r with %s", suite.name, type(config.scheduler).__name__)
    suite.run()

    if not finished.wait(timeout):
        error(f"Suite {suite.name!r} did not complete within {timeout} seconds.")
        ctx.exit(1)

    if suite.failures or suite.errors:
        error(
            f"{suite.failures} failures, {suite.errors} errors "
            f"in {suite.assertions + suite.failures} assertions."
        )
        ctx.exit(1)
    success(f"{suite.test_count} tests, {suite.assertions} assertions passed.")
