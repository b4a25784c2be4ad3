"""Helpers for the minispec CLI.

Parsing of logger-level options, loading of ``module:attribute`` targets and
status lines written to stderr with emoji to ASCII fallbacks.
"""

from .loader import as_suite, load_target
from .log_level_parser import parse_log_level
from .messages import error, success, warn

__all__ = ["as_suite", "error", "load_target", "parse_log_level", "success", "warn"]
