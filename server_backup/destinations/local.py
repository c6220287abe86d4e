"""
Local filesystem destination.

Store backups on local disk, NAS mount, USB drive, etc.
"""

from __future__ import annotations

from .base import Destination


class LocalDestination(Destination):

    def __init__(self, path: str):
        self.path = path.rstrip("/") or "/"

    def pretty_name(self) -> str:
        return f"file:{self.path}"

    def transport_url(self, server_name: str) -> str:
        return f"file://{self.path.rstrip('/')}/{server_name.lower()}"
