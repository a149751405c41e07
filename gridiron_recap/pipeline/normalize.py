"""
NormalizeStage — turn the raw scraped table into a typed results table.

Processing steps:
  1. Promote row ``config.normalize.header_row`` to column labels
     (snake-cased: ``"NO."`` → ``"no"``) and slice off it and every row
     above it (the page title row).
  2. Apply ``config.normalize.column_aliases`` (``no`` → ``game``).
  3. Check the columns later stages need are present.
  4. Parse the date column with ``config.normalize.date_format`` after
     stripping abbreviation periods (``"Jan. 15, 1967"``).
  5. Coerce ``config.normalize.numeric_columns`` to numbers.

Any unexpected shape fails the run with ``TableShapeError``; there is no
partial-success mode.
"""

from __future__ import annotations

import logging
import re

import pandas as pd

from gridiron_recap.models.meta import RunMetadata
from gridiron_recap.pipeline.base import PipelineStage

logger = logging.getLogger(__name__)


class TableShapeError(ValueError):
    """Raised when the scraped table does not look like the results table."""


class NormalizeStage(PipelineStage):
    """Promote the header, drop metadata rows and coerce column types."""

    stage_name = "normalize"

    def _execute(self, run: RunMetadata, frame: pd.DataFrame, **kwargs) -> pd.DataFrame:
        """Normalize a raw table produced by ``FetchStage``.

        Args:
            run:   In-progress run record (unused).
            frame: Raw string DataFrame.

        Returns:
            Normalized DataFrame with a parsed date column.
        """
        cfg = self.config.normalize

        out = promote_header(frame, cfg.header_row)
        out = apply_aliases(out, cfg.column_aliases)
        require_columns(out, [cfg.date_column, self.config.derive.result_column])
        out = coerce_types(
            out,
            date_column=cfg.date_column,
            date_format=cfg.date_format,
            numeric_columns=cfg.numeric_columns,
        )

        logger.info(
            "NormalizeStage: %d raw rows → %d data rows | columns=%s",
            len(frame), len(out), list(out.columns),
        )
        return out


# ── Processing helpers ─────────────────────────────────────────────────────────

_NON_WORD = re.compile(r"[^0-9a-z]+")


def snake_label(label: object) -> str:
    """``"NO."`` → ``"no"``, ``"Winning Team"`` → ``"winning_team"``."""
    return _NON_WORD.sub("_", str(label).strip().lower()).strip("_")


def promote_header(frame: pd.DataFrame, header_row: int) -> pd.DataFrame:
    """Use row ``header_row`` as column labels and keep only the rows below it.

    Columns whose header cell is blank (padding from a colspan title row) are
    dropped, as are rows that are entirely blank.

    Raises:
        TableShapeError: If the table has no row at ``header_row`` or the
            header yields duplicate labels.
    """
    if header_row >= len(frame):
        raise TableShapeError(
            f"Header row {header_row} requested but the table has only {len(frame)} row(s)."
        )

    labels = [snake_label(v) for v in frame.iloc[header_row]]
    body = frame.iloc[header_row + 1:].copy()
    body.columns = labels

    keep = [label for label in labels if label]
    if len(set(keep)) != len(keep):
        raise TableShapeError(f"Header row has duplicate labels: {keep}.")
    body = body[keep]

    blank = body.apply(lambda col: col.astype(str).str.strip() == "").all(axis=1)
    return body[~blank].reset_index(drop=True)


def apply_aliases(frame: pd.DataFrame, aliases: dict[str, str]) -> pd.DataFrame:
    """Rename columns per ``aliases``; unknown keys are ignored."""
    return frame.rename(columns=aliases)


def require_columns(frame: pd.DataFrame, columns: list[str]) -> None:
    """Raise ``TableShapeError`` if any of ``columns`` is missing."""
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise TableShapeError(
            f"Missing required column(s) {missing}; table has {list(frame.columns)}."
        )


def coerce_types(
    frame: pd.DataFrame,
    date_column: str,
    date_format: str,
    numeric_columns: list[str] | None = None,
) -> pd.DataFrame:
    """Parse the date column and coerce numeric columns, on a copy.

    Raises:
        TableShapeError: On an unparseable date or non-numeric value.
    """
    out = frame.copy()

    cleaned = out[date_column].astype(str).str.replace(".", "", regex=False).str.strip()
    try:
        out[date_column] = pd.to_datetime(cleaned, format=date_format)
    except ValueError as exc:
        raise TableShapeError(f"Unparseable value in '{date_column}': {exc}") from exc

    for col in numeric_columns or []:
        require_columns(out, [col])
        try:
            out[col] = pd.to_numeric(out[col], errors="raise")
        except ValueError as exc:
            raise TableShapeError(f"Non-numeric value in '{col}': {exc}") from exc

    return out
