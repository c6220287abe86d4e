################################################################################
# SERVER-BACKUP
#
# @file:        mysql.py
# @module:      server_backup.sources.mysql
# @description: MySQL source dumping one database into a private workspace.
# @author:      Server-Backup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT-Lizenz: siehe LICENSE oder https://opensource.org/licenses/MIT
# ==============================================================================
# Hinweise:
# - Password goes into my.cnf (mode 0600), never onto the command line
# - my.cnf is excluded from the transport so it is never uploaded
# - Workspace is registered with WorkspaceRegistry for crash cleanup
################################################################################

"""
MySQL dump source.

pre() creates a temporary workspace, writes a client options file with the
password and runs mysqldump into dump.sql. The whole workspace is then handed
to the transport tool; post() deletes it again.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from ..constants import MYSQL_DUMP_FILE, MYSQL_OPTIONS_FILE, MYSQL_WORKSPACE_PREFIX
from ..cores.workspace_registry import WorkspaceRegistry
from ..errors import DumpFailed, SourcePreparationFailed
from ..helpers.logging import get_logger
from ..types import RunContext
from .base import Source

logger = get_logger(__name__)


def quote_option_value(value: str) -> str:
    """Quote a value for a MySQL option file, where an unquoted # starts a comment."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class MysqlSource(Source):
    """Dump of a single MySQL database."""

    def __init__(
        self,
        database: str,
        user: Optional[str] = None,
        password: Optional[str] = None,
    ):
        """
        Args:
            database: Database name passed to mysqldump
            user: Per-source user, falls back to the plan's db_user
            password: Per-source password, falls back to the plan's db_password
        """
        self.database = database
        self.user = user
        self.password = password
        self.workspace: Optional[Path] = None

    def pretty_name(self) -> str:
        return f"mysql:{self.database}"

    def destination_path_segment(self) -> str:
        return f"mysql-{self.database}"

    # --------------- Credentials ---------------

    def resolve_user(self, context: RunContext) -> Optional[str]:
        return self.user if self.user is not None else context.plan.db_user

    def resolve_password(self, context: RunContext) -> Optional[str]:
        return self.password if self.password is not None else context.plan.db_password

    # --------------- Transport ---------------

    def transport_url(self) -> str:
        return str(self._require_workspace())

    def transport_options(self) -> List[str]:
        options_file = self._require_workspace() / MYSQL_OPTIONS_FILE
        return [f"--exclude={options_file}"]

    def _require_workspace(self) -> Path:
        if self.workspace is None:
            raise SourcePreparationFailed(
                f"{self.pretty_name()} has no workspace, pre() did not run"
            )
        return self.workspace

    # --------------- Lifecycle ---------------

    def pre(self, context: RunContext) -> None:
        try:
            workspace = Path(tempfile.mkdtemp(prefix=MYSQL_WORKSPACE_PREFIX))
        except OSError as e:
            raise SourcePreparationFailed(f"Could not create workspace: {e}") from e

        WorkspaceRegistry.get_instance().register(workspace)
        self.workspace = workspace
        logger.debug(f"Created workspace {workspace} for {self.pretty_name()}")

        try:
            self._write_options_file(context)
            self._dump(context)
        except Exception:
            self.post()
            raise

    def _write_options_file(self, context: RunContext) -> None:
        options_file = self.workspace / MYSQL_OPTIONS_FILE
        lines = ["[client]"]
        password = self.resolve_password(context)
        if password:
            lines.append(f"password={quote_option_value(password)}")

        fd = os.open(options_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

    def build_dump_command(self, context: RunContext) -> List[str]:
        # --defaults-extra-file must be the first option for mysqldump
        cmd = [
            context.plan.dump_binary,
            f"--defaults-extra-file={self.workspace / MYSQL_OPTIONS_FILE}",
        ]
        user = self.resolve_user(context)
        if user:
            cmd.append(f"-u{user}")
        cmd.append(self.database)
        return cmd

    def _dump(self, context: RunContext) -> None:
        cmd = self.build_dump_command(context)
        dump_file = self.workspace / MYSQL_DUMP_FILE
        context.echo_command(cmd)
        logger.debug(f"Dumping {self.database} into {dump_file}")

        try:
            with open(dump_file, "wb") as out:
                result = subprocess.run(cmd, stdout=out, stderr=subprocess.PIPE)
        except OSError as e:
            raise SourcePreparationFailed(f"Could not run {cmd[0]}: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or b"").decode("utf-8", errors="replace")
            logger.error(f"Dump of {self.database} failed with exit code {result.returncode}")
            raise DumpFailed(self.database, result.returncode, stderr)

    def post(self) -> None:
        if self.workspace is None:
            return
        workspace, self.workspace = self.workspace, None
        if workspace.exists():
            shutil.rmtree(workspace)
            logger.debug(f"Removed workspace {workspace}")
