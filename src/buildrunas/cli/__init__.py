"""Command-line interface for buildrunas."""

from buildrunas.cli.app import entrypoint, main

__all__ = ["entrypoint", "main"]
