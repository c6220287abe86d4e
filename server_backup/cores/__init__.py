"""Core orchestration: command composition, execution, reporting, cleanup."""

from .workspace_registry import WorkspaceRegistry
from .composer import TransportCommand, compose_command
from .reporter import report_results
from .backup_manager import BackupManager

__all__ = [
    "WorkspaceRegistry",
    "TransportCommand",
    "compose_command",
    "report_results",
    "BackupManager",
]
