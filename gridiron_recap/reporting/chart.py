"""
Bar chart of games per spread category.

Uses the non-interactive Agg backend so it works headless (CI, cron). The
figure is always closed after saving.
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd

from gridiron_recap.taxonomy.spread_taxonomy import SpreadCategory

logger = logging.getLogger(__name__)

_CATEGORY_COLOURS = {
    SpreadCategory.CLOSE: "#2a9d8f",
    SpreadCategory.STANDARD: "#8d99ae",
    SpreadCategory.BLOWOUT: "#e76f51",
}


def category_counts(frame: pd.DataFrame) -> pd.Series:
    """Games per category in close → Standard → blowout order, zero-filled."""
    order = [str(c) for c in SpreadCategory]
    return frame["category"].value_counts().reindex(order, fill_value=0)


def render_category_chart(
    frame: pd.DataFrame,
    path: Path,
    dpi: int = 150,
    title: str = "Super Bowl games by final-score spread",
) -> Path:
    """Save a bar chart of ``category_counts(frame)`` to ``path`` (PNG)."""
    counts = category_counts(frame)

    fig, ax = plt.subplots(figsize=(8, 5))
    bars = ax.bar(
        counts.index,
        counts.values,
        color=[_CATEGORY_COLOURS[SpreadCategory(c)] for c in counts.index],
    )
    ax.bar_label(bars)
    ax.set_title(title)
    ax.set_xlabel("Spread category")
    ax.set_ylabel("Games")
    fig.tight_layout()

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)

    logger.info("Chart saved to %s", path)
    return path
