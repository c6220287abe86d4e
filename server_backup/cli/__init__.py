"""Command line interface for Server-Backup."""

from .main import app, cli_main

__all__ = ["app", "cli_main"]
