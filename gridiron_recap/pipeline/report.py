"""
ReportStage — select recommendations, summarise, write files and the chart.

Input is the derived table from ``DeriveStage``. Output (the stage frame) is
the recommendation list. Side outputs are kept on the stage instance after a
successful run:

  ``summary``  — ``SpreadSummary`` for the whole table
  ``written``  — paths of files written (CSV/JSON, plus PNG unless disabled)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from gridiron_recap.config import AppConfig
from gridiron_recap.models.meta import RunMetadata
from gridiron_recap.pipeline.base import PipelineStage
from gridiron_recap.recommendations.ranker import select_recommendations
from gridiron_recap.reporting.chart import render_category_chart
from gridiron_recap.reporting.export import write_report_files
from gridiron_recap.reporting.summary import SpreadSummary, summarize_spreads

logger = logging.getLogger(__name__)


class ReportStage(PipelineStage):
    """Turn the derived table into the top-N rewatch list and report files."""

    stage_name = "report"

    def __init__(self, config: AppConfig) -> None:
        super().__init__(config)
        self.summary: Optional[SpreadSummary] = None
        self.written: list[Path] = []

    def _execute(
        self,
        run: RunMetadata,
        frame: pd.DataFrame,
        source: str = "",
        top_n: Optional[int] = None,
        output_dir: Optional[str | Path] = None,
        render_chart: bool = True,
        write_files: bool = True,
        **kwargs,
    ) -> pd.DataFrame:
        """Build the report.

        Args:
            run:          In-progress run record (unused).
            frame:        Derived table.
            source:       URL or file the table came from (for the JSON header).
            top_n:        Override ``config.report.top_n``.
            output_dir:   Override ``config.report.output_dir``.
            render_chart: Write the category bar chart.
            write_files:  Write CSV/JSON outputs; ``False`` keeps the run in memory.

        Returns:
            The recommendation DataFrame.
        """
        cfg = self.config.report
        derive = self.config.derive
        top_n = top_n or cfg.top_n
        out_dir = Path(output_dir or cfg.output_dir)

        recommendations = select_recommendations(frame, top_n=top_n)
        self.summary = summarize_spreads(frame, derive.low_quantile, derive.high_quantile)
        self.written = []

        if write_files:
            self.written.extend(
                write_report_files(frame, recommendations, self.summary, out_dir, source)
            )
        if render_chart:
            self.written.append(
                render_category_chart(frame, out_dir / cfg.chart_file, dpi=cfg.chart_dpi)
            )

        logger.info(
            "ReportStage: %d recommendation(s) from %d close game(s) | files=%d",
            len(recommendations),
            self.summary.category_counts.get("close", 0),
            len(self.written),
        )
        return recommendations
