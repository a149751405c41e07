"""
Shared pytest fixtures for the Gridiron Recap test suite.

Provides:
  - ``sample_html``: a trimmed copy of the ESPN winners page (title row,
    header row, eight games including one overtime result).
  - Frames at each pipeline step, built from ``sample_html``.
  - ``app_config``: default ``AppConfig`` writing outputs under ``tmp_path``.

Spreads in the sample are [25, 19, 9, 3, 4, 1, 3, 6], so with pandas' linear
interpolation Q1 = 3.0 and Q3 = 11.5:
  close    → XXV (1), V (3), XXXVI (3)
  Standard → III (9), XIII (4), LI (6)
  blowout  → I (25), II (19)
"""

from __future__ import annotations

import pandas as pd
import pytest

from gridiron_recap.config import AppConfig, LoggingConfig, ReportConfig
from gridiron_recap.ingestion.espn_client import extract_first_table
from gridiron_recap.pipeline.derive import compute_spread, label_spread_categories, split_results
from gridiron_recap.pipeline.normalize import apply_aliases, coerce_types, promote_header

_GAMES = [
    ("I", "Jan. 15, 1967", "Los Angeles Memorial Coliseum", "Green Bay", 35, "Kansas City", 10, ""),
    ("II", "Jan. 14, 1968", "Orange Bowl (Miami)", "Green Bay", 33, "Oakland", 14, ""),
    ("III", "Jan. 12, 1969", "Orange Bowl (Miami)", "New York Jets", 16, "Baltimore", 7, ""),
    ("V", "Jan. 17, 1971", "Orange Bowl (Miami)", "Baltimore", 16, "Dallas", 13, ""),
    ("XIII", "Jan. 21, 1979", "Orange Bowl (Miami)", "Pittsburgh", 35, "Dallas", 31, ""),
    ("XXV", "Jan. 27, 1991", "Tampa Stadium", "New York Giants", 20, "Buffalo", 19, ""),
    ("XXXVI", "Feb. 3, 2002", "Louisiana Superdome", "New England", 20, "St. Louis", 17, ""),
    ("LI", "Feb. 5, 2017", "NRG Stadium (Houston)", "New England", 34, "Atlanta", 28, " (OT)"),
]


def build_html(games=_GAMES) -> str:
    """Render ``games`` as an ESPN-style results page."""
    rows = "\n".join(
        f"<tr><td>{g}</td><td>{d}</td><td>{s}</td>"
        f"<td><a href='#'>{t1}</a> {s1}, <a href='#'>{t2}</a> {s2}{ot}</td></tr>"
        for g, d, s, t1, s1, t2, s2, ot in games
    )
    return f"""
    <html><body>
      <div class="mod-content">
        <table class="tablehead" cellpadding="3" cellspacing="1">
          <tr class="stathead"><td colspan="4">Super Bowl Winners and Results</td></tr>
          <tr class="colhead"><td>NO.</td><td>DATE</td><td>SITE</td><td>RESULT</td></tr>
          {rows}
        </table>
      </div>
      <table><tr><td>footer</td></tr></table>
    </body></html>
    """


@pytest.fixture
def sample_games() -> list[tuple]:
    return list(_GAMES)


@pytest.fixture
def sample_html() -> str:
    return build_html()


@pytest.fixture
def raw_frame(sample_html) -> pd.DataFrame:
    return pd.DataFrame(extract_first_table(sample_html), dtype="object")


@pytest.fixture
def normalized_frame(raw_frame) -> pd.DataFrame:
    out = promote_header(raw_frame, header_row=1)
    out = apply_aliases(out, {"no": "game"})
    return coerce_types(out, date_column="date", date_format="%b %d, %Y")


@pytest.fixture
def derived_frame(normalized_frame) -> pd.DataFrame:
    out = split_results(normalized_frame, "result")
    out = compute_spread(out)
    return label_spread_categories(out)


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Defaults, with outputs and logs redirected into ``tmp_path``."""
    return AppConfig(
        report=ReportConfig(output_dir=str(tmp_path / "outputs")),
        logging=LoggingConfig(log_file=str(tmp_path / "logs" / "test.log")),
    )
