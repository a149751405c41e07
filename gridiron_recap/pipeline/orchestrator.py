"""
End-to-end orchestration: fetch → normalize → derive → report.

``PipelineOrchestrator.run()`` executes the four stages strictly in order,
each consuming the previous stage's table. There is no branching and no
partial success: the first failing stage aborts the run, its ``RunMetadata``
is marked ``failed`` and the exception propagates to the caller.

Re-running on identical input gives identical tables. Every stage works on
a copy of its input, so nothing upstream is mutated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import httpx
import pandas as pd

from gridiron_recap.config import AppConfig
from gridiron_recap.models.meta import RunMetadata
from gridiron_recap.pipeline.derive import DeriveStage
from gridiron_recap.pipeline.fetch import FetchStage
from gridiron_recap.pipeline.normalize import NormalizeStage
from gridiron_recap.pipeline.report import ReportStage
from gridiron_recap.reporting.summary import SpreadSummary

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Complete result of one pipeline run.

    Attributes:
        source:          URL or file path the table came from.
        started_at:      UTC datetime when the run started.
        finished_at:     UTC datetime when the run finished.
        stage_runs:      ``RunMetadata`` per completed stage, in order.
        games:           Full derived table.
        recommendations: Top-N close games.
        summary:         Spread statistics.
        written_files:   Paths of report files written.
    """

    source:          str
    started_at:      datetime
    finished_at:     Optional[datetime]  = None
    stage_runs:      list[RunMetadata]   = field(default_factory=list)
    games:           pd.DataFrame        = field(default_factory=pd.DataFrame)
    recommendations: pd.DataFrame        = field(default_factory=pd.DataFrame)
    summary:         Optional[SpreadSummary] = None
    written_files:   list[Path]          = field(default_factory=list)


class PipelineOrchestrator:
    """Coordinates the four pipeline stages.

    Args:
        config:    AppConfig for this run.
        transport: Optional httpx transport handed to ``FetchStage`` (tests).
    """

    def __init__(
        self,
        config: AppConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        self.transport = transport

    def run(
        self,
        html_file: Optional[str | Path] = None,
        top_n: Optional[int] = None,
        output_dir: Optional[str | Path] = None,
        render_chart: bool = True,
        write_files: bool = True,
    ) -> PipelineResult:
        """Execute the full pipeline.

        Args:
            html_file:    Read a saved page instead of fetching ``config.source.url``.
            top_n:        Override ``config.report.top_n``.
            output_dir:   Override ``config.report.output_dir``.
            render_chart: Write the category bar chart.
            write_files:  Write CSV/JSON outputs.

        Returns:
            ``PipelineResult`` for the successful run.

        Raises:
            Exception: Whatever the failing stage raised.
        """
        source = str(html_file) if html_file is not None else self.config.source.url
        result = PipelineResult(source=source, started_at=datetime.now(timezone.utc))
        logger.info("Pipeline starting | source=%s", source)

        fetched = FetchStage(self.config).run(html_file=html_file, transport=self.transport)
        result.stage_runs.append(fetched.run)

        normalized = NormalizeStage(self.config).run(frame=fetched.frame)
        result.stage_runs.append(normalized.run)

        derived = DeriveStage(self.config).run(frame=normalized.frame)
        result.stage_runs.append(derived.run)
        result.games = derived.frame

        report_stage = ReportStage(self.config)
        reported = report_stage.run(
            frame=derived.frame,
            source=source,
            top_n=top_n,
            output_dir=output_dir,
            render_chart=render_chart,
            write_files=write_files,
        )
        result.stage_runs.append(reported.run)
        result.recommendations = reported.frame
        result.summary = report_stage.summary
        result.written_files = list(report_stage.written)

        result.finished_at = datetime.now(timezone.utc)
        logger.info(
            "Pipeline completed | games=%d recommendations=%d files=%d",
            len(result.games), len(result.recommendations), len(result.written_files),
        )
        return result
