"""Loading of ``module:attribute`` targets as suites.

A target names a module and, after a colon, a dotted attribute path inside
it; the attribute defaults to ``suite``. The attribute may be a `Suite`, a
single `TestCase`, a list of tests, or a factory returning one of those.
A factory that accepts a ``config`` parameter receives the CLI's `Config`.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import sys
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from minispec.config import Config
from minispec.domain.suite import Suite
from minispec.domain.test_case import TestCase
from minispec.errors import TargetLoadError

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE = "suite"  # pragma: no mutate


def load_target(
    target: str, config: Config, import_paths: Iterable[Path] = ()
) -> Suite:
    """Import `target` and turn what it names into a suite run with `config`.

    Args:
        target: ``package.module`` or ``package.module:attribute.path``.
        config: Configuration given to the resulting suite.
        import_paths: Directories searched before ``sys.path`` while importing.

    Raises:
        TargetLoadError: If the module cannot be imported, the attribute does
            not exist, or it does not describe a suite.
    """
    module_name, _, attribute = target.partition(":")
    module_name = module_name.strip()
    if not module_name:
        raise TargetLoadError(target, "missing module name")

    with _prepended(import_paths):
        try:
            module = importlib.import_module(module_name)
        except Exception as e:  # pylint: disable=broad-except
            raise TargetLoadError(target, f"{type(e).__name__}: {e}") from e

    obj: Any = module
    for part in (attribute.strip() or DEFAULT_ATTRIBUTE).split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise TargetLoadError(target, f"no attribute {part!r}") from e

    logger.debug("Loaded %r from %s", obj, target)
    return as_suite(obj, config, name=module_name)


def as_suite(obj: Any, config: Config, name: str | None = None) -> Suite:
    """Wrap `obj` in a suite using `config`.

    Raises:
        TargetLoadError: If `obj` is not a suite, a test, a list of tests, or
            a factory of one of those.
    """
    if isinstance(obj, Suite):
        obj.config = config
        return obj
    if isinstance(obj, TestCase):
        return Suite(obj.name, [obj], config=config)
    if isinstance(obj, (list, tuple)) and all(
        isinstance(item, TestCase) or item is None for item in obj
    ):
        return Suite(name, obj, config=config)
    if callable(obj):
        try:
            produced = inject_dependencies(obj, {"config": config})()
        except Exception as e:  # pylint: disable=broad-except
            raise TargetLoadError(
                getattr(obj, "__qualname__", repr(obj)), f"{type(e).__name__}: {e}"
            ) from e
        if callable(produced) and not isinstance(produced, (Suite, TestCase)):
            raise TargetLoadError(repr(obj), "factory returned another callable")
        return as_suite(produced, config, name=name)
    raise TargetLoadError(repr(obj), f"cannot run a {type(obj).__name__}")


def inject_dependencies(
    factory: Callable[..., Any], dependencies: Mapping[str, object]
) -> Callable[[], Any]:
    """Bind the `dependencies` that `factory` declares as parameters."""
    try:
        params = inspect.signature(factory).parameters
    except (TypeError, ValueError):
        params = {}
    deps = {name: dep for name, dep in dependencies.items() if name in params}
    return lambda: factory(**deps)


@contextmanager
def _prepended(paths: Iterable[Path]) -> Iterator[None]:
    entries = [str(Path(p).resolve()) for p in paths]
    sys.path[:0] = entries
    try:
        yield
    finally:
        for entry in entries:
            if entry in sys.path:
                sys.path.remove(entry)
