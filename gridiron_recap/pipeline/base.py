"""
Abstract base class for all pipeline stages.

Every stage follows the same contract:
  1. Receive ``AppConfig`` at construction.
  2. ``run(**kwargs)`` is the sole public API.
  3. ``run()`` creates a ``RunMetadata`` record, calls ``_execute()``,
     and finalises the record with the outcome.
  4. ``_execute()`` is the stage-specific implementation. It returns the
     stage's output table; ``rows_processed`` is that table's length.

Error handling is centralised here: stages never swallow exceptions. A
failing stage has its run marked ``failed`` and the exception re-raised.

Usage::

    class MyStage(PipelineStage):
        stage_name = "derive"

        def _execute(self, run: RunMetadata, **kwargs) -> pd.DataFrame:
            return kwargs["frame"].copy()

    result = MyStage(config=app_config).run(frame=normalized)
    result.frame, result.run.status
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

import pandas as pd

from gridiron_recap.config import AppConfig
from gridiron_recap.models.meta import RunMetadata

logger = logging.getLogger(__name__)


@dataclass
class StageResult:
    """Output of one stage run: its audit record and its table."""

    run: RunMetadata
    frame: pd.DataFrame


class PipelineStage(ABC):
    """Abstract base for all pipeline stages.

    Subclasses must:
      1. Set ``stage_name`` class variable.
      2. Implement ``_execute(run, **kwargs) -> pd.DataFrame``.

    Attributes:
        stage_name: String identifier matching a valid ``RunMetadata.pipeline_stage``.
        config: The application configuration for this run.
    """

    stage_name: str  # Override in subclass

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(self, **kwargs) -> StageResult:
        """Execute this pipeline stage.

        Args:
            **kwargs: Stage-specific keyword arguments passed to ``_execute()``.

        Returns:
            ``StageResult`` whose run has ``status='success'``.

        Raises:
            Exception: Re-raises any exception from ``_execute()`` after
                recording ``status='failed'`` on the run record.
        """
        run = RunMetadata(
            run_slug=str(uuid4()),
            pipeline_stage=self.stage_name,
            config_snapshot=self.config.model_dump(),
            started_at=datetime.now(timezone.utc),
        )
        logger.info("Stage [%s] starting | run_slug=%s", self.stage_name, run.run_slug)

        try:
            frame = self._execute(run=run, **kwargs)
        except Exception as exc:
            run.status = "failed"
            run.error_message = str(exc)
            run.finished_at = datetime.now(timezone.utc)
            logger.error(
                "Stage [%s] FAILED: %s | run_slug=%s",
                self.stage_name, exc, run.run_slug,
            )
            raise

        run.status = "success"
        run.rows_processed = len(frame)
        run.finished_at = datetime.now(timezone.utc)
        logger.info(
            "Stage [%s] completed | rows=%d | run_slug=%s",
            self.stage_name, run.rows_processed, run.run_slug,
        )
        return StageResult(run=run, frame=frame)

    @abstractmethod
    def _execute(self, run: RunMetadata, **kwargs) -> pd.DataFrame:
        """Stage-specific implementation.

        Args:
            run: The in-progress ``RunMetadata`` record (mutable).
            **kwargs: Stage-specific parameters.

        Returns:
            The stage's output table.
        """
        ...
