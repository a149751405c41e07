"""
DeriveStage — split result strings into teams and scores, then label spreads.

Field splitting
---------------
A result looks like ``"Green Bay 35, Kansas City 10"``. It is split on the
first comma into two halves, and each half on its *last* space using the
lookahead pattern ``\\s(?=\\S+$)``: a space followed by a run of non-space
characters through end-of-string. Multi-word names such as ``"Kansas City"``
stay intact because only the final space qualifies.

A trailing ``(OT)`` marker is stripped first and recorded in ``overtime``.
Anything else that does not fit (no comma, no score, non-digit score) fails
the run with ``ResultParseError``.

Category labeling
-----------------
Q1 and Q3 are computed once over the whole ``spread`` column. Every row
starts as ``"Standard"``; rows with ``spread <= Q1`` become ``"close"``; then
rows with ``spread >= Q3`` become ``"blowout"``. Both comparisons are
inclusive and the blowout pass runs last, so if Q1 == Q3 a row equal to both
ends up ``"blowout"``.

Because thresholds come from the whole column, editing one score can relabel
other rows, but only by moving Q1 or Q3.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import pandas as pd

from gridiron_recap.models.meta import RunMetadata
from gridiron_recap.pipeline.base import PipelineStage
from gridiron_recap.taxonomy.spread_taxonomy import SpreadCategory

logger = logging.getLogger(__name__)

LAST_SPACE = re.compile(r"\s(?=\S+$)")
OVERTIME_MARKER = re.compile(r"\s*\(OT\)\s*$", re.IGNORECASE)
_SCORE = re.compile(r"\d+")


class ResultParseError(ValueError):
    """Raised when a result string cannot be split into two name/score pairs."""


@dataclass(frozen=True)
class ParsedResult:
    """One result string split into its structured fields."""

    team1: str
    score1: int
    team2: str
    score2: int
    overtime: bool = False

    @property
    def spread(self) -> int:
        return abs(self.score1 - self.score2)


class DeriveStage(PipelineStage):
    """Add team/score columns, ``spread`` and ``category``."""

    stage_name = "derive"

    def _execute(self, run: RunMetadata, frame: pd.DataFrame, **kwargs) -> pd.DataFrame:
        cfg = self.config.derive

        out = split_results(frame, cfg.result_column)
        out = compute_spread(out)
        q1, q3 = spread_quartiles(out, cfg.low_quantile, cfg.high_quantile)
        out = label_spread_categories(out, cfg.low_quantile, cfg.high_quantile)

        counts = out["category"].value_counts().to_dict()
        logger.info(
            "DeriveStage: %d games | Q1=%.2f Q3=%.2f | categories=%s",
            len(out), q1, q3, counts,
        )
        return out


# ── Field splitting ────────────────────────────────────────────────────────────


def split_result(text: str) -> ParsedResult:
    """Split one ``"Name 35, Other Name 10"`` string.

    >>> split_result("Green Bay 35, Denver 10")
    ParsedResult(team1='Green Bay', score1=35, team2='Denver', score2=10, overtime=False)

    Raises:
        ResultParseError: If the string does not hold two name/score pairs.
    """
    body, overtime = _strip_overtime(text.strip())
    halves = body.split(",", 1)
    if len(halves) != 2:
        raise ResultParseError(f"No comma separating the two teams in {text!r}.")

    team1, score1 = _split_half(halves[0], text)
    team2, score2 = _split_half(halves[1], text)
    return ParsedResult(team1, score1, team2, score2, overtime)


def _strip_overtime(text: str) -> tuple[str, bool]:
    stripped = OVERTIME_MARKER.sub("", text)
    return stripped, stripped != text


def _split_half(half: str, original: str) -> tuple[str, int]:
    parts = LAST_SPACE.split(half.strip(), maxsplit=1)
    if len(parts) != 2 or not _SCORE.fullmatch(parts[1]):
        raise ResultParseError(f"Cannot split name and score from {half.strip()!r} in {original!r}.")
    return parts[0].strip(), int(parts[1])


def split_results(frame: pd.DataFrame, column: str = "result") -> pd.DataFrame:
    """Vectorised ``split_result`` over ``frame[column]``, on a copy.

    Adds ``team1``, ``score1``, ``team2``, ``score2`` (int) and
    ``overtime`` (bool). The source column is kept.

    Raises:
        ResultParseError: Naming the first malformed row.
    """
    if frame.empty:
        raise ResultParseError("No rows to split; the results table is empty.")

    out = frame.copy()
    text = out[column].astype(str).str.strip()
    out["overtime"] = text.str.contains(OVERTIME_MARKER)
    text = text.str.replace(OVERTIME_MARKER, "", regex=True)

    halves = text.str.split(",", n=1, expand=True)
    if halves.shape[1] < 2 or halves[1].isna().any():
        bad = text.index[0] if halves.shape[1] < 2 else halves[1].isna().idxmax()
        raise ResultParseError(
            f"Row {bad}: no comma separating the two teams in {out.at[bad, column]!r}."
        )

    out["team1"], out["score1"] = _split_pairs(halves[0], out[column])
    out["team2"], out["score2"] = _split_pairs(halves[1], out[column])
    return out


def _split_pairs(half: pd.Series, original: pd.Series) -> tuple[pd.Series, pd.Series]:
    """Split a column of ``"Name 35"`` strings on the last space."""
    parts = half.str.strip().str.split(LAST_SPACE, n=1, regex=True, expand=True)
    if parts.shape[1] < 2:
        bad = parts.index[0]
        raise ResultParseError(f"Row {bad}: no score found in {original.at[bad]!r}.")

    valid = parts[1].fillna("").str.fullmatch(r"\d+")
    if not valid.all():
        bad = valid.idxmin()
        raise ResultParseError(f"Row {bad}: no score found in {original.at[bad]!r}.")

    return parts[0].str.strip(), parts[1].astype(int)


# ── Spread and categories ──────────────────────────────────────────────────────


def compute_spread(frame: pd.DataFrame) -> pd.DataFrame:
    """Add ``spread = |score1 - score2|`` on a copy."""
    out = frame.copy()
    out["spread"] = (out["score1"] - out["score2"]).abs()
    return out


def spread_quartiles(
    frame: pd.DataFrame,
    low: float = 0.25,
    high: float = 0.75,
) -> tuple[float, float]:
    """Return ``(Q1, Q3)`` of the ``spread`` column (linear interpolation)."""
    spreads = frame["spread"]
    return float(spreads.quantile(low)), float(spreads.quantile(high))


def label_spread_categories(
    frame: pd.DataFrame,
    low: float = 0.25,
    high: float = 0.75,
) -> pd.DataFrame:
    """Add ``category`` from the whole-column quartiles, on a copy.

    Order matters: ``close`` is assigned before ``blowout`` so that the
    blowout label wins when a spread meets both thresholds.
    """
    out = frame.copy()
    q1, q3 = spread_quartiles(out, low, high)

    out["category"] = str(SpreadCategory.STANDARD)
    out.loc[out["spread"] <= q1, "category"] = str(SpreadCategory.CLOSE)
    out.loc[out["spread"] >= q3, "category"] = str(SpreadCategory.BLOWOUT)
    return out
