"""Abstract capabilities the engine depends on."""
