"""
Transport command composition.

Builds one transport invocation from a source, a destination and the plan.
No I/O happens here; the BackupManager runs what this returns.
"""

from __future__ import annotations

import posixpath
import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List

from ..constants import PASSPHRASE_ENV
from ..types import BackupPlan

if TYPE_CHECKING:
    from ..destinations.base import Destination
    from ..sources.base import Source


def render_command(argv: List[str]) -> str:
    return shlex.join(argv)


@dataclass
class TransportCommand:
    argv: List[str]
    env: Dict[str, str] = field(default_factory=dict)

    def display(self) -> str:
        """Command line for verbose output. Leaves out the environment, which holds secrets."""
        return render_command(self.argv)


def compose_env(source: "Source", destination: "Destination", plan: BackupPlan) -> Dict[str, str]:
    """
    Merge environment layers: passphrase, then destination, then source.

    Later layers win on key collisions, so a source can override a
    destination setting of the same name.
    """
    env = {PASSPHRASE_ENV: plan.passphrase}
    env.update(destination.transport_env())
    env.update(source.transport_env())
    return env


def compose_args(source: "Source", destination: "Destination", plan: BackupPlan) -> List[str]:
    """
    Transport arguments in the order the transport grammar needs.

    Options come first (destination, then source, appended without
    de-duplication), followed by the two positional URLs.
    """
    args: List[str] = []
    args.extend(destination.transport_options())
    args.extend(source.transport_options())
    args.append(source.transport_url())
    args.append(
        posixpath.join(
            destination.transport_url(plan.server_name),
            source.destination_path_segment(),
        )
    )
    return args


def compose_command(source: "Source", destination: "Destination", plan: BackupPlan) -> TransportCommand:
    return TransportCommand(
        argv=[plan.transport_binary, *compose_args(source, destination, plan)],
        env=compose_env(source, destination, plan),
    )
