"""Console reporter.

Renders the event stream of a suite (or of a single test) as plain,
line-oriented output on a Rich console.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from minispec.adapters.serialize import stringify
from minispec.domain import events

if TYPE_CHECKING:
    from minispec.domain.eventhub import EventEmitter


class ConsoleReporter:
    """Print one line per event of a run.

    Args:
        console: Rich console to print to; defaults to stdout.
        verbose: Also print passed assertions.

    Example:
        ```py
        suite = Suite("math", [TestCase("sum", body)])
        ConsoleReporter().attach(suite)
        suite.run()
        ```
    """

    def __init__(self, console: Console | None = None, verbose: bool = False) -> None:
        self.console = console or Console(highlight=False)
        self.verbose = verbose

    def attach(self, emitter: EventEmitter) -> EventEmitter:
        """Listen to every event of `emitter`."""
        return emitter.on(events.ALL, self.handle)

    def detach(self, emitter: EventEmitter) -> EventEmitter:
        """Stop listening to `emitter`."""
        return emitter.off(events.ALL, self.handle)

    def handle(self, event: events.Event) -> None:
        """Render a single event."""
        target = event.target
        name = escape(str(getattr(target, "name", target)))
        match event.type:
            case events.START:
                self.console.print(f"[bold]Started suite `{name}`.[/bold]")
            case events.SETUP:
                self.console.print(f"Started test `{name}`.")
            case events.ASSERTION:
                if self.verbose:
                    self.console.print(
                        f"  [green]Assertion:[/green] {escape(str(event.message))}."
                    )
            case events.FAILURE:
                self.console.print(
                    f"  [red]Failure:[/red] {escape(str(event.message))}. "
                    f"Expected: {escape(stringify(event.expected))}. "
                    f"Actual: {escape(stringify(event.actual))}."
                )
            case events.ERROR:
                self.console.print(
                    f"  [bold red]Error:[/bold red] {escape(_describe(event))}"
                )
            case events.TEARDOWN:
                self.console.print(
                    f"Finished test `{name}`. "
                    f"{target.assertions} assertions, "
                    f"{target.failures} failures, "
                    f"{target.errors} errors."
                )
            case events.COMPLETE:
                style = "green" if not (target.failures or target.errors) else "red"
                self.console.print(
                    f"[bold {style}]Finished suite `{name}`. "
                    f"{target.test_count} tests, "
                    f"{target.assertions} assertions, "
                    f"{target.failures} failures, "
                    f"{target.errors} errors.[/bold {style}]"
                )


def _describe(event: events.Event) -> str:
    if event.error is not None:
        return f"{type(event.error).__name__}: {event.error}"
    return str(event.message or "error")
