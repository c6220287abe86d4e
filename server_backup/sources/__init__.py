"""Backup sources."""

from .base import Source
from .directory import DirectorySource
from .mysql import MysqlSource

__all__ = [
    "Source",
    "DirectorySource",
    "MysqlSource",
]
