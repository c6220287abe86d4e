################################################################################
# SERVER-BACKUP
#
# @file:        main.py
# @module:      server_backup.cli.main
# @description: Typer-based CLI entry point running one backup pass.
# @author:      Server-Backup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT-Lizenz: siehe LICENSE oder https://opensource.org/licenses/MIT
################################################################################

"""
Server-Backup - main CLI

Loads the configuration, runs every source against every destination and
exits with 0 when everything succeeded, 1 otherwise.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..constants import DEFAULT_CONFIG_PATH, EXIT_FAILURE
from ..cores import BackupManager, WorkspaceRegistry
from ..errors import ConfigurationError
from ..helpers import ui_utils
from ..helpers.config import load_plan
from ..helpers.logging import get_logger, log_manager

app = typer.Typer(
    add_completion=False,
    help="Server-Backup – back up directories and MySQL databases with duplicity.",
    context_settings={"help_option_names": ["-h", "--help"]},
)
logger = get_logger(__name__)


@app.command()
def run(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH, "--config", "-c", help="Use a config file."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print every command before running it."
    ),
    log_level: str = typer.Option(
        "INFO", "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also write log lines to this file."
    ),
):
    """
    Back up all configured sources to all configured destinations.
    """
    try:
        log_manager.configure(level=log_level, log_file=log_file)
    except ValueError as e:
        ui_utils.print_error(str(e))
        raise typer.Exit(code=EXIT_FAILURE)

    try:
        plan = load_plan(config_path)
    except ConfigurationError as e:
        ui_utils.print_error(str(e))
        raise typer.Exit(code=EXIT_FAILURE)

    if plan.is_empty():
        ui_utils.print_warning("No sources or no destinations configured")

    registry = WorkspaceRegistry.get_instance()
    registry.install_handlers()
    try:
        report = BackupManager(plan, verbose=verbose).run()
    finally:
        registry.restore_handlers()
        registry.sweep()

    raise typer.Exit(code=report.exit_code)


def cli_main():
    """
    Entry point for CLI

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        ui_utils.console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        ui_utils.console.print(f"[red]Error:[/red] {escape(str(e))}")
        logger.debug("Unhandled error", exc_info=True)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    cli_main()
