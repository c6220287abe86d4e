################################################################################
# SERVER-BACKUP
#
# @file:        types.py
# @module:      server_backup.types
# @description: Shared data models for backup plans, results, and failures.
# @author:      Server-Backup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT-Lizenz: siehe LICENSE oder https://opensource.org/licenses/MIT
# ==============================================================================
# Hinweise:
# - BackupPlan is the explicit value handed to the BackupManager
# - ExecutionResult captures one source/destination attempt
# - FailureLedger keeps failures in attempt order
################################################################################

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, ItemsView, Iterator, KeysView, List, Optional

from .constants import DEFAULT_DUMP_BINARY, DEFAULT_TRANSPORT_BINARY

if TYPE_CHECKING:
    from .destinations.base import Destination
    from .sources.base import Source


# ---- Plan ----

@dataclass
class BackupPlan:
    server_name: str
    sources: List["Source"] = field(default_factory=list)
    destinations: List["Destination"] = field(default_factory=list)
    passphrase: str = ""
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    transport_binary: str = DEFAULT_TRANSPORT_BINARY
    dump_binary: str = DEFAULT_DUMP_BINARY
    transport_timeout: Optional[int] = None  # seconds, None = wait forever

    def is_empty(self) -> bool:
        return not self.sources or not self.destinations


def _ignore_command(argv: List[str]) -> None:
    return None


@dataclass
class RunContext:
    """What a source needs from the running backup besides its own settings."""

    plan: BackupPlan
    echo_command: Callable[[List[str]], None] = _ignore_command


# ---- Results ----

class PairState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ExecutionResult:
    source_name: str
    destination_name: Optional[str] = None  # None for pre/post hook failures
    state: PairState = PairState.NOT_STARTED
    log: Optional[str] = None

    @property
    def key(self) -> str:
        if self.destination_name is None:
            return self.source_name
        return f"{self.source_name}->{self.destination_name}"

    @property
    def failed(self) -> bool:
        return self.state == PairState.FAILED


class FailureLedger:
    """
    Failures of one run, keyed by "<source>-><destination>" or "<source>".

    Entries keep the order in which they were recorded.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def record(self, key: str, log: Optional[str]) -> None:
        self._entries[key] = log or ""

    def record_result(self, result: ExecutionResult) -> None:
        self.record(result.key, result.log)

    def items(self) -> ItemsView[str, str]:
        return self._entries.items()

    def keys(self) -> KeysView[str]:
        return self._entries.keys()

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


@dataclass
class RunReport:
    ledger: FailureLedger = field(default_factory=FailureLedger)
    results: List[ExecutionResult] = field(default_factory=list)
    exit_code: int = 0

    @property
    def attempted_pairs(self) -> List[ExecutionResult]:
        return [r for r in self.results if r.destination_name is not None]

    @property
    def success(self) -> bool:
        return not self.ledger
