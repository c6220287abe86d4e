################################################################################
# SERVER-BACKUP
#
# @file:        config.py
# @module:      server_backup.helpers.config
# @description: Pydantic configuration models and BackupPlan loading
# @author:      Server-Backup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT-Lizenz: siehe LICENSE oder https://opensource.org/licenses/MIT
################################################################################

"""
Pydantic Configuration Models for Server-Backup

Type-safe, validated JSON configuration. Each source and destination kind
has its own record, selected by the "type" field, which builds the runtime
object used by the BackupManager.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..constants import DEFAULT_CONFIG_PATH, DEFAULT_DUMP_BINARY, DEFAULT_TRANSPORT_BINARY
from ..destinations import Destination, LocalDestination, S3Destination
from ..errors import ConfigurationError
from ..sources import DirectorySource, MysqlSource, Source
from ..types import BackupPlan
from .logging import get_logger

logger = get_logger(__name__)


# --------------- Sources ---------------

class DirectorySourceConfig(BaseModel):
    """Plain directory backed up as-is"""

    type: Literal["dir"] = "dir"
    path: str = Field(..., description="Absolute directory path")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Source path cannot be empty")
        return v.strip()

    def build(self) -> Source:
        return DirectorySource(self.path)


class MysqlSourceConfig(BaseModel):
    """MySQL database dumped with mysqldump before the backup"""

    type: Literal["mysql"] = "mysql"
    database: str = Field(..., description="Database name")
    user: Optional[str] = Field(default=None, description="Overrides database.user")
    password: Optional[str] = Field(default=None, description="Overrides database.password")

    @field_validator("database")
    @classmethod
    def validate_database(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Database name cannot be empty")
        return v.strip()

    def build(self) -> Source:
        return MysqlSource(self.database, user=self.user, password=self.password)


SourceConfig = Annotated[
    Union[DirectorySourceConfig, MysqlSourceConfig],
    Field(discriminator="type"),
]


# --------------- Destinations ---------------

class S3DestinationConfig(BaseModel):
    """S3 bucket"""

    type: Literal["s3"] = "s3"
    bucket: str = Field(..., description="Bucket name")
    access_key_id: Optional[str] = Field(default=None, description="AWS access key id")
    secret_access_key: Optional[str] = Field(default=None, description="AWS secret access key")

    @field_validator("bucket")
    @classmethod
    def validate_bucket(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Bucket name cannot be empty")
        return v.strip()

    def build(self) -> Destination:
        return S3Destination(
            self.bucket,
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
        )


class LocalDestinationConfig(BaseModel):
    """Local disk, NAS mount or USB drive"""

    type: Literal["file"] = "file"
    path: str = Field(..., description="Target directory")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Destination path cannot be empty")
        return v.strip()

    def build(self) -> Destination:
        return LocalDestination(self.path)


DestinationConfig = Annotated[
    Union[S3DestinationConfig, LocalDestinationConfig],
    Field(discriminator="type"),
]


# --------------- Global settings ---------------

class DatabaseConfig(BaseModel):
    """Default database credentials for all MySQL sources"""

    user: Optional[str] = None
    password: Optional[str] = None


class TransportConfig(BaseModel):
    """Transport tool invocation"""

    binary: str = Field(default=DEFAULT_TRANSPORT_BINARY, description="Transport executable")
    timeout: Optional[int] = Field(
        default=None,
        description="Seconds before a transport run is aborted (unset = no timeout)",
    )

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        return v


class ServerBackupConfig(BaseModel):
    """Main Server-Backup configuration"""

    server_name: str = Field(..., description="Server identity, used as folder on destinations")
    passphrase: Optional[str] = Field(default=None, description="Transport encryption passphrase")
    passphrase_file: Optional[Path] = Field(default=None, description="File holding the passphrase")
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    dump_binary: str = Field(default=DEFAULT_DUMP_BINARY, description="Dump executable")
    sources: List[SourceConfig] = Field(default_factory=list)
    destinations: List[DestinationConfig] = Field(default_factory=list)

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("server_name cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_passphrase(self) -> ServerBackupConfig:
        if self.passphrase is not None and self.passphrase_file is not None:
            raise ValueError("Set either passphrase or passphrase_file, not both")
        return self

    @classmethod
    def load(cls, path: Path) -> ServerBackupConfig:
        """Load configuration from JSON file"""
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        return cls.model_validate_json(path.read_text(encoding="utf-8"))

    @classmethod
    def get_default_path(cls) -> Path:
        return DEFAULT_CONFIG_PATH

    def get_passphrase(self) -> str:
        """
        Get the transport passphrase.

        Passphrase can be stored in:
        1. passphrase - Direct value
        2. passphrase_file - Path to a file holding it

        Returns:
            Passphrase ("" when neither is configured)

        Raises:
            ValueError: If passphrase_file is set but unreadable
        """
        if self.passphrase is not None:
            return self.passphrase

        if self.passphrase_file is not None:
            pp_file = self.passphrase_file.expanduser()
            if not pp_file.exists():
                raise ValueError(f"Passphrase file not found: {pp_file}")
            try:
                return pp_file.read_text(encoding="utf-8").strip()
            except OSError as e:
                raise ValueError(f"Cannot read passphrase file {pp_file}: {e}")

        logger.warning("No passphrase configured, transport runs with an empty PASSPHRASE")
        return ""

    def to_plan(self) -> BackupPlan:
        return BackupPlan(
            server_name=self.server_name,
            sources=[s.build() for s in self.sources],
            destinations=[d.build() for d in self.destinations],
            passphrase=self.get_passphrase(),
            db_user=self.database.user,
            db_password=self.database.password,
            transport_binary=self.transport.binary,
            dump_binary=self.dump_binary,
            transport_timeout=self.transport.timeout,
        )


def load_plan(path: Optional[Path] = None) -> BackupPlan:
    """
    Read a configuration file and turn it into a BackupPlan.

    Args:
        path: Config file, defaults to /etc/server-backup/config.json

    Raises:
        ConfigurationError: File missing, unreadable, or invalid
    """
    path = path or ServerBackupConfig.get_default_path()
    try:
        config = ServerBackupConfig.load(path)
        plan = config.to_plan()
    except FileNotFoundError as e:
        raise ConfigurationError(str(e)) from e
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}:\n{e}") from e
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot load configuration {path}: {e}") from e

    logger.debug(
        f"Loaded {path}: {len(plan.sources)} source(s), {len(plan.destinations)} destination(s)"
    )
    return plan
