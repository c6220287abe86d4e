"""
Exception hierarchy for Server-Backup.

Run-time errors (source preparation, transport) are caught by the
BackupManager and turned into failure ledger entries; only
ConfigurationError is allowed to end the program before a run starts.
"""

from typing import Optional


class ServerBackupError(Exception):
    """Base class for all Server-Backup errors."""


class ConfigurationError(ServerBackupError):
    """Configuration file missing, unreadable or invalid."""


class SourcePreparationFailed(ServerBackupError):
    """A source's pre() hook could not prepare its data."""


class DumpFailed(SourcePreparationFailed):
    """The database dump utility exited non-zero."""

    def __init__(self, database: str, returncode: int, stderr: str = ""):
        self.database = database
        self.returncode = returncode
        self.stderr = stderr
        message = f"Error creating dump of {database} (exit code {returncode})"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)


class TransportFailed(ServerBackupError):
    """The transport subprocess exited non-zero."""

    def __init__(self, returncode: int, output: Optional[str] = None):
        self.returncode = returncode
        self.output = output or ""
        super().__init__(self.output or f"Transport exited with code {returncode}")


class TransportLaunchFailed(ServerBackupError):
    """The transport invocation could not be composed or started."""
