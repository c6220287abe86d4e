"""Unit tests for plan and result types."""

import pytest

from server_backup.types import BackupPlan, ExecutionResult, FailureLedger, PairState, RunReport
from tests.conftest import FakeDestination, FakeSource


@pytest.mark.unit
class TestBackupPlan:

    def test_empty_without_sources(self):
        assert BackupPlan(server_name="x", destinations=[FakeDestination()]).is_empty()

    def test_empty_without_destinations(self):
        assert BackupPlan(server_name="x", sources=[FakeSource()]).is_empty()

    def test_not_empty(self, plan):
        assert not plan.is_empty()

    def test_defaults(self):
        plan = BackupPlan(server_name="x")

        assert plan.transport_binary == "duplicity"
        assert plan.dump_binary == "mysqldump"
        assert plan.transport_timeout is None


@pytest.mark.unit
class TestExecutionResult:

    def test_pair_key(self):
        assert ExecutionResult("/data/app", "s3:b").key == "/data/app->s3:b"

    def test_source_key(self):
        assert ExecutionResult("mysql:shop").key == "mysql:shop"

    def test_initial_state(self):
        result = ExecutionResult("a", "b")

        assert result.state == PairState.NOT_STARTED
        assert not result.failed


@pytest.mark.unit
class TestFailureLedger:

    def test_empty(self):
        ledger = FailureLedger()

        assert not ledger
        assert len(ledger) == 0

    def test_keeps_attempt_order(self):
        ledger = FailureLedger()
        ledger.record("b->x", "second letter")
        ledger.record("a", "first letter")
        ledger.record("c->y", "third")

        assert list(ledger.keys()) == ["b->x", "a", "c->y"]

    def test_record_result(self):
        ledger = FailureLedger()
        ledger.record_result(ExecutionResult("src", "dest", PairState.FAILED, "boom"))

        assert "src->dest" in ledger
        assert ledger["src->dest"] == "boom"

    def test_missing_log_becomes_empty_text(self):
        ledger = FailureLedger()
        ledger.record("src", None)

        assert ledger["src"] == ""


@pytest.mark.unit
class TestRunReport:

    def test_attempted_pairs_exclude_source_entries(self):
        report = RunReport()
        report.results.append(ExecutionResult("s", None, PairState.FAILED, "pre"))
        report.results.append(ExecutionResult("t", "d", PairState.SUCCEEDED))

        assert [r.key for r in report.attempted_pairs] == ["t->d"]
        assert report.success
