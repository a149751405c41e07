"""
Recommendation ranker: picks the closest games from the derived table.

Selection rule
--------------
1. Keep only rows labelled ``SpreadCategory.CLOSE``.
2. Sort by ``spread`` ascending; ties go to the most recent game first
   (``date`` descending).
3. Take the first ``top_n`` rows.
4. Project away helper columns (raw result string, category, overtime flag),
   keeping ``RECOMMENDATION_COLUMNS``.

The result never has more than ``top_n`` rows and may have fewer when the
table has few close games.
"""

from __future__ import annotations

import pandas as pd

from gridiron_recap.taxonomy.spread_taxonomy import SpreadCategory

RECOMMENDATION_COLUMNS: list[str] = [
    "game", "date", "site", "team1", "score1", "team2", "score2", "spread",
]


def select_recommendations(
    frame: pd.DataFrame,
    top_n: int = 5,
    columns: list[str] | None = None,
) -> pd.DataFrame:
    """Return the top-N close games, closest and most recent first.

    Args:
        frame:   Derived table with ``spread``, ``date`` and ``category``.
        top_n:   Maximum rows to return.
        columns: Columns to keep. Defaults to ``RECOMMENDATION_COLUMNS``
                 (only those present in ``frame`` are kept).

    Returns:
        New DataFrame with a fresh 0-based index.
    """
    if top_n < 1:
        raise ValueError(f"top_n must be >= 1, got {top_n}.")

    keep = [c for c in (columns or RECOMMENDATION_COLUMNS) if c in frame.columns]

    close = frame[frame["category"] == str(SpreadCategory.CLOSE)]
    ranked = close.sort_values(
        by=["spread", "date"],
        ascending=[True, False],
        kind="mergesort",
    )
    return ranked.head(top_n)[keep].reset_index(drop=True)
