"""
ASCII terminal formatters for CLI output.

All formatters accept in-memory results and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies beyond pandas (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

import pandas as pd

from gridiron_recap.pipeline.derive import ParsedResult
from gridiron_recap.reporting.summary import SpreadSummary


# ── Summary statistics ────────────────────────────────────────────────────────


def format_spread_summary(summary: SpreadSummary, source: str = "") -> str:
    """Format descriptive spread statistics and category counts.

    Example::

        === Spread Summary ===
          Source: https://www.espn.com/nfl/superbowl/history/winners
          Games:     58   Overtime: 2
          Mean:    13.6   Median:  10.5   Std:   10.2
          Min:        1   Q1:       4.0   Q3:    19.0   Max:     45

          close       15
          Standard    28
          blowout     15
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Spread Summary ===")
    if source:
        lines.append(f"  Source: {source}")
    lines.append(f"  Games: {summary.count:>6}   Overtime: {summary.overtime_games}")
    lines.append(
        f"  Mean:  {summary.mean:>6.1f}   Median: {summary.median:>5.1f}   "
        f"Std: {summary.std:>5.1f}"
    )
    lines.append(
        f"  Min:   {summary.min:>6}   Q1:     {summary.q1:>5.1f}   "
        f"Q3:  {summary.q3:>5.1f}   Max: {summary.max:>4}"
    )
    lines.append("")
    for category, count in summary.category_counts.items():
        lines.append(f"  {category:<10}  {count:>3}")
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations_table(recommendations: pd.DataFrame) -> str:
    """Format the top-N close games as an ASCII table.

    Example::

        === Closest Games to Rewatch ===
          Rank  Game    Date        Matchup                                   Spread
          --------------------------------------------------------------------------
             1  XXV     1991-01-27  New York Giants 20 - Buffalo 19              1
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Closest Games to Rewatch ===")

    if recommendations.empty:
        lines.append("")
        lines.append("  (no close games found)")
        return "\n".join(lines)

    header = (
        f"  {'Rank':>4}  {'Game':<6}  {'Date':<10}  {'Matchup':<40}  {'Spread':>6}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, row in enumerate(recommendations.itertuples(index=False), start=1):
        when = row.date.strftime("%Y-%m-%d") if hasattr(row.date, "strftime") else str(row.date)
        matchup = f"{row.team1} {row.score1} - {row.team2} {row.score2}"[:40]
        lines.append(
            f"  {rank:>4}  {str(row.game):<6}  {when:<10}  {matchup:<40}  {row.spread:>6}"
        )
        if getattr(row, "site", ""):
            lines.append(f"        {'':<6}  {'':<10}  @ {str(row.site)[:38]}")
    return "\n".join(lines)


# ── Single result ─────────────────────────────────────────────────────────────


def format_parsed_result(parsed: ParsedResult) -> str:
    """One field per line, for the ``split-result`` command."""
    return "\n".join([
        f"  Team1:    {parsed.team1}",
        f"  Score1:   {parsed.score1}",
        f"  Team2:    {parsed.team2}",
        f"  Score2:   {parsed.score2}",
        f"  Spread:   {parsed.spread}",
        f"  Overtime: {'yes' if parsed.overtime else 'no'}",
    ])
