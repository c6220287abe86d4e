"""Backup destinations."""

from .base import Destination
from .local import LocalDestination
from .s3 import S3Destination

__all__ = [
    "Destination",
    "LocalDestination",
    "S3Destination",
]
