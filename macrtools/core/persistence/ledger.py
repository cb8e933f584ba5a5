"""
Run ledger: append-only history of install runs.

Each finished run appends one ``RunRecord`` as a JSON line. Entries are
never modified or deleted. The installer never reads the ledger to make
decisions; ``status`` and ``history`` display it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from macrtools.core.models.run import RunRecord

logger = logging.getLogger(__name__)


class InstallLedger:
    """NDJSON ledger of ``RunRecord`` entries."""

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def write(self, record: RunRecord) -> None:
        """Append ``record``.  Failures are logged, not raised."""
        line = json.dumps(record.model_dump(mode="json"), ensure_ascii=False) + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line)
            logger.debug("Run %s written to %s", record.run_id, self._path)
        except OSError as e:
            logger.error("Failed to write run ledger %s: %s", self._path, e)

    def read_all(self) -> list[RunRecord]:
        """All records, oldest first.  Corrupt lines are skipped."""
        if not self._path.is_file():
            return []

        records = []
        try:
            with self._path.open("r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        records.append(RunRecord.model_validate(json.loads(line)))
                    except ValueError as e:
                        logger.warning("Skipping corrupt ledger entry at line %d: %s", line_num, e)
        except OSError as e:
            logger.error("Failed to read run ledger %s: %s", self._path, e)

        return records

    def read_recent(self, n: int = 10) -> list[RunRecord]:
        """The last ``n`` records, oldest first.  ``n <= 0`` gives none."""
        if n <= 0:
            return []
        return self.read_all()[-n:]

    def last(self) -> RunRecord | None:
        records = self.read_all()
        return records[-1] if records else None
