"""Final run summary and exit status."""

from __future__ import annotations

from ..constants import EXIT_FAILURE, EXIT_OK, FAILURE_HEADER, SUCCESS_MESSAGE
from ..helpers import ui_utils
from ..types import FailureLedger


def report_results(ledger: FailureLedger) -> int:
    """
    Print every recorded failure with its diagnostic output.

    Returns:
        0 if the ledger is empty, 1 otherwise
    """
    if not ledger:
        ui_utils.print_plain(SUCCESS_MESSAGE)
        return EXIT_OK

    ui_utils.print_plain(FAILURE_HEADER)
    for key, log in ledger.items():
        ui_utils.print_plain(f"{key} failed:")
        ui_utils.print_plain(log.rstrip("\n"))
        ui_utils.print_plain()
    return EXIT_FAILURE
