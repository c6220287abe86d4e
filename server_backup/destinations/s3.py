"""
S3 destination.

Credentials are passed through the environment so they never show up in
process listings or verbose output.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..constants import (
    AWS_ACCESS_KEY_ID_ENV,
    AWS_SECRET_ACCESS_KEY_ENV,
    S3_NEW_STYLE_FLAG,
    S3_URL_SCHEME,
)
from .base import Destination


class S3Destination(Destination):
    """S3 (or S3 compatible) bucket."""

    def __init__(
        self,
        bucket: str,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
    ):
        self.bucket = bucket
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key

    def pretty_name(self) -> str:
        return f"s3:{self.bucket}"

    def transport_url(self, server_name: str) -> str:
        # one folder per server so several servers can share a bucket
        return f"{S3_URL_SCHEME}://{self.bucket}/{server_name.lower()}"

    def transport_options(self) -> List[str]:
        return [S3_NEW_STYLE_FLAG]

    def transport_env(self) -> Dict[str, str]:
        env = {}
        if self.access_key_id is not None:
            env[AWS_ACCESS_KEY_ID_ENV] = self.access_key_id
        if self.secret_access_key is not None:
            env[AWS_SECRET_ACCESS_KEY_ENV] = self.secret_access_key
        return env
