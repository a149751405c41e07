"""
Pipeline run metadata.

``RunMetadata`` is the execution audit record for one pipeline stage. Every
run records a complete ``config_snapshot`` (full AppConfig as a dict) so a
run can be reproduced by restoring that config and re-running.

Unlike ``GameRecord`` this model is NOT frozen: ``status``,
``rows_processed``, ``error_message`` and ``finished_at`` are updated as the
stage executes. Records live in memory only; nothing is persisted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

VALID_PIPELINE_STAGES = frozenset({
    "fetch", "normalize", "derive", "report", "orchestrator",
})
VALID_RUN_STATUSES = frozenset({"started", "success", "failed"})


class RunMetadata(BaseModel):
    """Pipeline execution audit record.

    Attributes:
        run_slug: UUID4 string uniquely identifying this run.
        pipeline_stage: Which stage produced this run record.
        status: Current execution status.
        rows_processed: Rows in the stage's output table.
        error_message: Exception text when ``status == "failed"``.
        config_snapshot: ``AppConfig.model_dump()`` at run time.
        started_at: When the stage started.
        finished_at: When the stage finished, or ``None`` while running.
    """

    model_config = ConfigDict(validate_assignment=True)

    run_slug: str
    pipeline_stage: str
    status: str = "started"
    rows_processed: int = 0
    error_message: Optional[str] = None
    config_snapshot: dict[str, Any] = {}
    started_at: datetime
    finished_at: Optional[datetime] = None

    @field_validator("pipeline_stage")
    @classmethod
    def validate_stage(cls, v: str) -> str:
        if v not in VALID_PIPELINE_STAGES:
            raise ValueError(
                f"Unknown pipeline_stage '{v}'. Must be one of {sorted(VALID_PIPELINE_STAGES)}."
            )
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in VALID_RUN_STATUSES:
            raise ValueError(
                f"Unknown status '{v}'. Must be one of {sorted(VALID_RUN_STATUSES)}."
            )
        return v

    @property
    def duration_seconds(self) -> Optional[float]:
        """Wall-clock duration, or ``None`` if the run has not finished."""
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()
