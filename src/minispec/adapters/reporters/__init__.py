"""Reporters that render the engine's event stream."""

from .console import ConsoleReporter

__all__ = ["ConsoleReporter"]
