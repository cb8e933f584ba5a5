"""
Tests for the run ledger.
"""

from pathlib import Path

from macrtools.core.models.run import InstallStage, RunRecord
from macrtools.core.persistence.ledger import InstallLedger


def _record(status_error: str | None = None) -> RunRecord:
    r = RunRecord(os_version="10.14.6", minor_version=14)
    r.advance(InstallStage.PREFLIGHT)
    r.finish(RuntimeError(status_error) if status_error else None)
    return r


class TestInstallLedger:
    def test_empty(self, tmp_path: Path):
        ledger = InstallLedger(tmp_path / "runs.ndjson")
        assert ledger.read_all() == []
        assert ledger.last() is None

    def test_append_and_read(self, tmp_path: Path):
        ledger = InstallLedger(tmp_path / "state" / "runs.ndjson")
        first, second = _record(), _record("boom")
        ledger.write(first)
        ledger.write(second)

        records = ledger.read_all()
        assert [r.run_id for r in records] == [first.run_id, second.run_id]
        assert ledger.last().status == "failed"
        assert ledger.path.read_text().count("\n") == 2

    def test_read_recent(self, tmp_path: Path):
        ledger = InstallLedger(tmp_path / "runs.ndjson")
        written = [_record() for _ in range(5)]
        for r in written:
            ledger.write(r)
        assert [r.run_id for r in ledger.read_recent(2)] == [w.run_id for w in written[-2:]]

    def test_read_recent_non_positive(self, tmp_path: Path):
        ledger = InstallLedger(tmp_path / "runs.ndjson")
        for _ in range(3):
            ledger.write(_record())
        assert ledger.read_recent(0) == []
        assert ledger.read_recent(-1) == []

    def test_corrupt_lines_skipped(self, tmp_path: Path):
        path = tmp_path / "runs.ndjson"
        ledger = InstallLedger(path)
        ledger.write(_record())
        with path.open("a") as f:
            f.write("{not json\n\n")
            f.write('{"stage": "no_such_stage"}\n')
        ledger.write(_record())
        assert len(ledger.read_all()) == 2

    def test_write_failure_is_logged(self, tmp_path: Path, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        ledger = InstallLedger(blocker / "runs.ndjson")
        ledger.write(_record())
        assert "Failed to write run ledger" in caplog.text
