"""JobHook command-line interface."""

from jobhook.cli.main import cli, main

__all__ = ["cli", "main"]
