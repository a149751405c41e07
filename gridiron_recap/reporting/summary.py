"""
Summary statistics over the derived results table.

``summarize_spreads()`` is pure: it reads ``spread``, ``category`` and
(optionally) ``overtime`` and returns a ``SpreadSummary``. Quartiles use the
same pandas interpolation as the category labels, so the numbers printed in
the report are the thresholds that produced the labels.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import pandas as pd

from gridiron_recap.taxonomy.spread_taxonomy import SpreadCategory


@dataclass
class SpreadSummary:
    """Descriptive statistics for the ``spread`` column.

    Attributes:
        count:           Number of games.
        mean:            Mean spread.
        median:          Median spread.
        std:             Sample standard deviation (0.0 for a single game).
        min / max:       Extremes.
        q1 / q3:         Category thresholds.
        category_counts: Games per ``SpreadCategory`` value (all three keys
                         present, zero-filled).
        overtime_games:  Games decided in overtime.
    """

    count:           int
    mean:            float
    median:          float
    std:             float
    min:             int
    q1:              float
    q3:              float
    max:             int
    category_counts: dict[str, int] = field(default_factory=dict)
    overtime_games:  int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_spreads(
    frame: pd.DataFrame,
    low: float = 0.25,
    high: float = 0.75,
) -> SpreadSummary:
    """Compute a ``SpreadSummary`` for a derived table.

    Raises:
        ValueError: If ``frame`` is empty.
    """
    if frame.empty:
        raise ValueError("Cannot summarize an empty results table.")

    spreads = frame["spread"]
    counts = frame["category"].value_counts()
    std = spreads.std()

    return SpreadSummary(
        count=int(spreads.count()),
        mean=float(spreads.mean()),
        median=float(spreads.median()),
        std=0.0 if pd.isna(std) else float(std),
        min=int(spreads.min()),
        q1=float(spreads.quantile(low)),
        q3=float(spreads.quantile(high)),
        max=int(spreads.max()),
        category_counts={str(c): int(counts.get(str(c), 0)) for c in SpreadCategory},
        overtime_games=int(frame["overtime"].sum()) if "overtime" in frame else 0,
    )
