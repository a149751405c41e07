"""
Export helpers for the derived table and the recommendation list.

All functions write to disk and return the written ``Path``. Parent
directories are created when missing.

Output files (written by ReportStage)
-------------------------------------
  {output_dir}/
    games_{date}.csv             -- full derived table, one row per game
    recommendations_{date}.csv   -- top-N close games
    recommendations_{date}.json  -- same rows plus run summary, via GameRecord
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd

from gridiron_recap.models.game import records_from_frame
from gridiron_recap.reporting.summary import SpreadSummary

logger = logging.getLogger(__name__)


def export_frame_csv(frame: pd.DataFrame, path: Path) -> Path:
    """Write ``frame`` to a UTF-8 CSV file without the index.

    Datetime columns are written as ISO dates (``YYYY-MM-DD``).
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False, date_format="%Y-%m-%d", encoding="utf-8")
    logger.debug("Wrote %d rows to %s", len(frame), path)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def build_recommendations_payload(
    recommendations: pd.DataFrame,
    summary: SpreadSummary,
    source: str,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    """Assemble the JSON document for a recommendation list.

    Every row is validated through ``GameRecord`` first, so a row whose
    spread disagrees with its scores never reaches disk.

    Raises:
        pydantic.ValidationError: On an invalid row.
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    records = records_from_frame(recommendations)
    return {
        "generated_at":    generated_at.isoformat(),
        "source":          source,
        "summary":         summary.to_dict(),
        "recommendations": [
            {"rank": i, **rec.model_dump(mode="json", exclude={"category", "overtime"})}
            for i, rec in enumerate(records, start=1)
        ],
    }


def write_report_files(
    games: pd.DataFrame,
    recommendations: pd.DataFrame,
    summary: SpreadSummary,
    output_dir: Path,
    source: str,
    run_date: date | None = None,
) -> list[Path]:
    """Write the games CSV, recommendations CSV and recommendations JSON.

    Args:
        games:           Full derived table.
        recommendations: Output of ``select_recommendations``.
        summary:         Spread statistics for the JSON header.
        output_dir:      Target directory.
        source:          URL or file the table came from.
        run_date:        Date label for the filenames. Defaults to today.

    Returns:
        Paths written, in the order above.
    """
    if run_date is None:
        run_date = date.today()

    payload = build_recommendations_payload(recommendations, summary, source)

    paths = [
        export_frame_csv(games, output_dir / f"games_{run_date}.csv"),
        export_frame_csv(recommendations, output_dir / f"recommendations_{run_date}.csv"),
        export_to_json(payload, output_dir / f"recommendations_{run_date}.json"),
    ]
    logger.info("Report files written to %s", output_dir)
    return paths
