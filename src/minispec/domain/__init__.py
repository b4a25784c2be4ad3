"""Core engine: events, equality, tests and suites."""
