################################################################################
# SERVER-BACKUP
#
# @file:        workspace_registry.py
# @module:      server_backup.cores.workspace_registry
# @description: Process-wide registry of temporary workspaces swept on exit.
# @author:      Server-Backup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT-Lizenz: siehe LICENSE oder https://opensource.org/licenses/MIT
# ==============================================================================
# Hinweise:
# - Workspaces hold database credentials, they must not outlive the process
# - Entries are only appended; sweep() skips paths already removed
# - atexit covers normal exits, install_handlers() covers SIGINT/SIGTERM
################################################################################

from __future__ import annotations

import atexit
import os
import shutil
import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional, Union

from ..helpers.logging import get_logger

logger = get_logger(__name__)


class WorkspaceRegistry:
    """
    Singleton tracking every temporary workspace created during this process.

    Sources remove their own workspace in post(); the registry is the
    safety net for crashes, unhandled errors and termination signals.
    """

    _instance: Optional["WorkspaceRegistry"] = None
    _instance_lock = threading.Lock()
    _creating = False

    def __init__(self) -> None:
        if not WorkspaceRegistry._creating:
            raise RuntimeError("Use WorkspaceRegistry.get_instance()")
        self._paths: List[Path] = []
        self._lock = threading.Lock()
        self._atexit_installed = False
        self._cleanup_in_progress = False
        self._original_sigint = None
        self._original_sigterm = None

    @classmethod
    def get_instance(cls) -> "WorkspaceRegistry":
        with cls._instance_lock:
            if cls._instance is None:
                cls._creating = True
                try:
                    cls._instance = cls()
                finally:
                    cls._creating = False
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the current instance (tests only; does not sweep)."""
        with cls._instance_lock:
            if cls._instance is not None and cls._instance._atexit_installed:
                atexit.unregister(cls._instance.sweep)
            cls._instance = None

    @property
    def paths(self) -> List[Path]:
        with self._lock:
            return list(self._paths)

    def register(self, path: Union[str, Path]) -> None:
        """Track a workspace for removal at process exit."""
        with self._lock:
            self._paths.append(Path(path))
            if not self._atexit_installed:
                atexit.register(self.sweep)
                self._atexit_installed = True
        logger.debug(f"Registered workspace for exit cleanup: {path}")

    def sweep(self) -> int:
        """
        Remove every registered workspace that still exists.

        Errors are logged and skipped so one stuck directory does not keep
        the others on disk.

        Returns:
            Number of directories removed
        """
        removed = 0
        for path in self.paths:
            if not os.path.exists(path):
                continue
            try:
                shutil.rmtree(path)
                removed += 1
                logger.debug(f"Removed leftover workspace: {path}")
            except OSError as e:
                logger.error(f"Could not remove workspace {path}: {e}")
        return removed

    # --------------- Signals ---------------

    def install_handlers(self) -> None:
        """Sweep workspaces when the process is interrupted or terminated."""
        self._original_sigint = signal.signal(signal.SIGINT, self._signal_handler)
        self._original_sigterm = signal.signal(signal.SIGTERM, self._signal_handler)

    def restore_handlers(self) -> None:
        if self._original_sigint is not None:
            signal.signal(signal.SIGINT, self._original_sigint)
        if self._original_sigterm is not None:
            signal.signal(signal.SIGTERM, self._original_sigterm)
        self._original_sigint = None
        self._original_sigterm = None

    def _signal_handler(self, signum, frame) -> None:
        exit_code = 128 + signum
        if self._cleanup_in_progress:
            # second signal while sweeping: give up immediately
            sys.exit(exit_code)
            return
        self._cleanup_in_progress = True
        logger.warning(f"Received signal {signum}, removing temporary workspaces")
        self.sweep()
        sys.exit(exit_code)
