"""Fixtures for end-to-end CLI tests.

Every item under `tests/e2e/` is marked `e2e`. The fixtures provide a
CliRunner, an isolated working directory, a test-only ``log-demo`` command
that logs at every level, and a helper writing suite modules to import.
"""

import logging
import sys
import textwrap
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from minispec.entrypoints.cli.main import minispec

# pylint: disable=redefined-outer-name, unused-argument

E2E_ROOT = Path(__file__).parent.resolve()
SUITE_MODULE_PREFIX = "e2e_suite_"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the `e2e` mark to every item collected under `tests/e2e/`."""
    for item in items:
        if E2E_ROOT not in item.path.resolve().parents:
            continue
        if not any(marker.name == "e2e" for marker in item.iter_markers()):
            item.add_marker(pytest.mark.e2e)


@click.command()
def log_demo():
    """Log one message per level on a minispec and a third-party logger."""
    logger = logging.getLogger("minispec.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party = logging.getLogger("some.thirdparty")
    third_party.debug("This is a debug-level third-party test message.")
    third_party.info("This is an info-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command(group: click.Group, name: str) -> None:
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for section in getattr(group, "_sections", []):
        getattr(section, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register ``log-demo`` on the top-level group for one test."""
    minispec.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command(minispec, "log-demo")


@pytest.fixture
def runner():
    """A Click CliRunner."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem() as path:
        yield Path(path)


@pytest.fixture
def suite_module(tmp_path):
    """Return a writer of importable suite modules.

    ``suite_module(name, source)`` writes ``e2e_suite_<name>.py`` and returns
    its ``(module name, directory)``. The modules are dropped from
    ``sys.modules`` afterwards.
    """

    def write(name: str, source: str) -> tuple[str, str]:
        module = f"{SUITE_MODULE_PREFIX}{name}"
        (tmp_path / f"{module}.py").write_text(textwrap.dedent(source), encoding="utf-8")
        return module, str(tmp_path)

    yield write
    for name in [n for n in sys.modules if n.startswith(SUITE_MODULE_PREFIX)]:
        del sys.modules[name]
