"""Helper modules and utilities for Server-Backup."""

from .logging import get_logger, log_manager

__all__ = [
    'get_logger',
    'log_manager',
]
