"""The ``minispec`` command-line interface."""
