"""Browse and search a library of command templates and automation scripts."""

__version__ = "0.1.0"
