"""
RunRecord: the in-memory state of one install run.

The orchestrator advances ``stage`` as it goes; the finished record is
appended to the run ledger. Nothing reads it back to make decisions
within a run.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class InstallStage(str, Enum):
    """States of the toolchain install state machine."""

    PREFLIGHT = "preflight"
    CHECK_BASE_TOOLCHAIN = "check_base_toolchain"
    RESET_SELECTION = "reset_selection"
    RESOLVE_UPDATE_LABEL = "resolve_update_label"
    INSTALL_BASE = "install_base"
    CLEANUP_ENV_FILES = "cleanup_env_files"
    RESOLVE_COMPILER_TARGET = "resolve_compiler_target"
    FETCH_COMPILER = "fetch_compiler"
    VERIFY_COMPILER = "verify_compiler"
    INSTALL_COMPILER = "install_compiler"
    DONE = "done"
    FAILED = "failed"


class RunRecord(BaseModel):
    """Summary of one install run."""

    run_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = ""

    stage: InstallStage = InstallStage.PREFLIGHT
    stages: list[InstallStage] = Field(default_factory=list)
    status: str = "running"  # running, ok, failed

    # ── Observations ────────────────────────────────────────────
    os_version: str = ""
    minor_version: int | None = None
    base_toolchain_installed: bool | None = None
    update_label: str | None = None
    compiler_version: str | None = None
    compiler_url: str | None = None
    backups: list[str] = Field(default_factory=list)

    error: str | None = None
    error_type: str | None = None

    def advance(self, stage: InstallStage) -> None:
        """Move to ``stage`` and record the transition."""
        self.stage = stage
        self.stages.append(stage)

    def finish(self, error: BaseException | None = None) -> None:
        """Close the record as ``ok`` or ``failed``."""
        self.ended_at = _now_iso()
        if error is None:
            self.status = "ok"
            self.advance(InstallStage.DONE)
        else:
            self.status = "failed"
            self.error = str(error)
            self.error_type = type(error).__name__
            # Keep the stage that failed visible in ``stage``
            self.stages.append(InstallStage.FAILED)
