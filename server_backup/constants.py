"""
Constants used throughout the Server-Backup application.

This module defines all constant values used across different modules
to ensure consistency and ease of maintenance.
"""

from pathlib import Path

# Version information
VERSION = "1.0.0"

# Default paths
DEFAULT_CONFIG_PATH = Path("/etc/server-backup/config.json")

# External binaries
DEFAULT_TRANSPORT_BINARY = "duplicity"
DEFAULT_DUMP_BINARY = "mysqldump"

# Environment handed to the transport tool
PASSPHRASE_ENV = "PASSPHRASE"
AWS_ACCESS_KEY_ID_ENV = "AWS_ACCESS_KEY_ID"
AWS_SECRET_ACCESS_KEY_ENV = "AWS_SECRET_ACCESS_KEY"

# S3 destination
S3_URL_SCHEME = "s3+http"
S3_NEW_STYLE_FLAG = "--s3-use-new-style"

# MySQL dump workspace
MYSQL_WORKSPACE_PREFIX = "mysql-backup"
MYSQL_OPTIONS_FILE = "my.cnf"
MYSQL_DUMP_FILE = "dump.sql"

# Report
SUCCESS_MESSAGE = "Everything succeded =)"
FAILURE_HEADER = "During backups an error did occur:"

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
