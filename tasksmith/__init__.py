"""Parse, locate and merge Taskfile task definitions."""

__version__ = "0.1.0"