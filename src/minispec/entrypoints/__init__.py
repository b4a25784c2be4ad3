"""Entrypoints for minispec.

Expose the engine to the outside world. The command-line interface loads a
suite, attaches a reporter and turns the totals into an exit status.
"""
