"""Unit tests for the final report."""

import pytest

from server_backup.cores.reporter import report_results
from server_backup.types import FailureLedger


@pytest.mark.unit
class TestReportResults:

    def test_success(self, capsys):
        exit_code = report_results(FailureLedger())

        out = capsys.readouterr().out
        assert exit_code == 0
        assert out.strip().endswith("Everything succeded =)")

    def test_failures_listed_in_order(self, capsys):
        ledger = FailureLedger()
        ledger.record("/data/app->s3:b", "connection refused\n")
        ledger.record("mysql:shop", "Error creating dump of shop")

        exit_code = report_results(ledger)

        out = capsys.readouterr().out
        assert exit_code == 1
        assert "During backups an error did occur:" in out
        assert "/data/app->s3:b failed:\nconnection refused\n" in out
        assert out.index("/data/app->s3:b failed:") < out.index("mysql:shop failed:")
        assert "Everything succeded" not in out
