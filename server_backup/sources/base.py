"""
Source base class.

A Source is one logical thing to back up. The BackupManager only talks to
this interface, so adding a new kind of source needs no change there.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List

from ..types import RunContext


class Source(ABC):
    """Abstract base class for backup sources."""

    @abstractmethod
    def pretty_name(self) -> str:
        """Human readable name used in progress output and ledger keys."""

    @abstractmethod
    def destination_path_segment(self) -> str:
        """Short, path-safe name appended below the destination URL."""

    @abstractmethod
    def transport_url(self) -> str:
        """Local path or URL the transport tool reads from."""

    def transport_options(self) -> List[str]:
        """Additional transport CLI options."""
        return []

    def transport_env(self) -> Dict[str, str]:
        """Additional transport environment variables."""
        return {}

    def pre(self, context: RunContext) -> None:
        """Run before any destination is attempted. Raise to skip the source."""

    def post(self) -> None:
        """Run after all destinations were attempted. Must be safe to repeat."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.pretty_name()!r})"
