################################################################################
# SERVER-BACKUP
#
# @file:        backup_manager.py
# @module:      server_backup.cores.backup_manager
# @description: Runs every source against every destination and collects failures.
# @author:      Server-Backup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT-Lizenz: siehe LICENSE oder https://opensource.org/licenses/MIT
# ==============================================================================
# Hinweise:
# - Strictly sequential: one source, one destination at a time
# - A failing pair never aborts the run, it becomes a ledger entry
# - post() runs for every source whose pre() succeeded
################################################################################

"""
Backup orchestration for Server-Backup.

For each source: pre(), then one transport run per destination, then
post(). Errors are recorded in a FailureLedger and reported at the end.
"""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING, List

from ..errors import TransportFailed, TransportLaunchFailed
from ..helpers import ui_utils
from ..helpers.logging import get_logger
from ..types import BackupPlan, ExecutionResult, PairState, RunContext, RunReport
from .composer import TransportCommand, compose_command, render_command
from .reporter import report_results

if TYPE_CHECKING:
    from ..destinations.base import Destination
    from ..sources.base import Source

logger = get_logger(__name__)


class BackupManager:
    """
    Executes a BackupPlan.

    The manager only uses the Source and Destination interfaces, new kinds
    of either plug in without changes here.
    """

    def __init__(self, plan: BackupPlan, verbose: bool = False):
        """
        Args:
            plan: Sources, destinations and global settings for this run
            verbose: Print every subprocess command line before running it
        """
        self.plan = plan
        self.verbose = verbose
        self.report = RunReport()
        self.context = RunContext(
            plan=plan,
            echo_command=self._echo_command,
        )

    def run(self) -> RunReport:
        """
        Back up every source to every destination and print the summary.

        Returns:
            RunReport with ledger, per-attempt results and exit code
        """
        if self.plan.is_empty():
            logger.warning(
                f"Nothing to do: {len(self.plan.sources)} source(s), "
                f"{len(self.plan.destinations)} destination(s) configured"
            )

        for source in self.plan.sources:
            self.run_source(source)

        ui_utils.print_plain()
        self.report.exit_code = report_results(self.report.ledger)
        return self.report

    def run_source(self, source: "Source") -> None:
        name = source.pretty_name()
        ui_utils.print_plain(f"Backup {name}")

        try:
            source.pre(self.context)
        except Exception as e:
            logger.error(f"Preparing {name} failed: {e}")
            self._record(ExecutionResult(name, None, PairState.FAILED, str(e)))
            ui_utils.print_plain("failed.")
            return

        try:
            for destination in self.plan.destinations:
                self.run_pair(source, destination)
        finally:
            try:
                source.post()
            except Exception as e:
                logger.error(f"Cleaning up {name} failed: {e}")
                self._record(ExecutionResult(name, None, PairState.FAILED, str(e)))

    def run_pair(self, source: "Source", destination: "Destination") -> ExecutionResult:
        result = ExecutionResult(source.pretty_name(), destination.pretty_name())
        ui_utils.print_plain(f" -> {result.destination_name}...", end="")

        result.state = PairState.RUNNING
        try:
            command = compose_command(source, destination, self.plan)
            self.run_transport(command)
            result.state = PairState.SUCCEEDED
        except TransportFailed as e:
            result.state = PairState.FAILED
            result.log = e.output
        except Exception as e:
            result.state = PairState.FAILED
            result.log = str(e)

        if result.state == PairState.SUCCEEDED:
            ui_utils.print_plain("ok.")
        else:
            logger.debug(f"{result.key} failed")
            ui_utils.print_plain("failed.")
        self._record(result)
        return result

    def run_transport(self, command: TransportCommand) -> None:
        """
        Run one transport invocation to completion.

        Raises:
            TransportFailed: Non-zero exit, carries the combined output
            TransportLaunchFailed: Binary missing, not executable, or timed out
        """
        self._echo(command.display())
        env = dict(os.environ)
        env.update(command.env)

        try:
            proc = subprocess.run(
                command.argv,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                timeout=self.plan.transport_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise TransportLaunchFailed(
                f"{command.argv[0]} timed out after {e.timeout}s"
            ) from e
        except (OSError, ValueError) as e:
            raise TransportLaunchFailed(f"Could not run {command.argv[0]}: {e}") from e

        if proc.returncode != 0:
            raise TransportFailed(proc.returncode, proc.stdout)

    def _echo_command(self, argv: List[str]) -> None:
        self._echo(render_command(argv))

    def _echo(self, command_line: str) -> None:
        logger.debug(f"Running: {command_line}")
        if self.verbose:
            ui_utils.print_command(command_line)

    def _record(self, result: ExecutionResult) -> None:
        self.report.results.append(result)
        if result.failed:
            self.report.ledger.record_result(result)
