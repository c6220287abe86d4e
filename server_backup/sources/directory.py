"""Directory source: backs up a path as-is."""

from __future__ import annotations

import posixpath

from .base import Source


class DirectorySource(Source):

    def __init__(self, path: str):
        self.path = path

    def pretty_name(self) -> str:
        return self.path

    def destination_path_segment(self) -> str:
        return posixpath.basename(self.path.rstrip("/")) or self.path

    def transport_url(self) -> str:
        return self.path
