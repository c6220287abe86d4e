"""
Destination base class.

A Destination is one remote target. Instances are immutable once the plan
is loaded; every attempt for every source reads the same values.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List


class Destination(ABC):
    """Abstract base class for backup destinations."""

    @abstractmethod
    def pretty_name(self) -> str:
        """Human readable name used in progress output and ledger keys."""

    @abstractmethod
    def transport_url(self, server_name: str) -> str:
        """Root URL for this server's backups on the destination."""

    def transport_options(self) -> List[str]:
        """Additional transport CLI options."""
        return []

    def transport_env(self) -> Dict[str, str]:
        """Additional transport environment variables (used for secrets)."""
        return {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.pretty_name()!r})"
