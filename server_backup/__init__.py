################################################################################
# SERVER-BACKUP
#
# @file:        __init__.py
# @module:      server_backup
# @description: Exposes version, plan types, and the backup manager.
# @author:      Server-Backup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT-Lizenz: siehe LICENSE oder https://opensource.org/licenses/MIT
################################################################################

"""
Server-Backup: back up directories and database dumps to several
destinations at once, using duplicity as the transport.
"""

from .constants import VERSION

__version__ = VERSION
__author__ = "Server-Backup Contributors"

from .helpers.logging import get_logger, log_manager

from .types import (
    BackupPlan,
    ExecutionResult,
    FailureLedger,
    PairState,
    RunContext,
    RunReport,
)

from .sources import Source, DirectorySource, MysqlSource
from .destinations import Destination, S3Destination, LocalDestination
from .cores import BackupManager, WorkspaceRegistry, compose_command, report_results

__all__ = [
    "VERSION",
    "BackupPlan",
    "ExecutionResult",
    "FailureLedger",
    "PairState",
    "RunContext",
    "RunReport",
    "Source",
    "DirectorySource",
    "MysqlSource",
    "Destination",
    "S3Destination",
    "LocalDestination",
    "BackupManager",
    "WorkspaceRegistry",
    "compose_command",
    "report_results",
    "get_logger",
    "log_manager",
]
