"""
ESPN Super Bowl history client.

Source:  https://www.espn.com/nfl/superbowl/history/winners

No API key required; the page is public HTML.

The page carries a single results table laid out as::

    Super Bowl Winners and Results            <- title row (one wide cell)
    NO. | DATE | SITE | RESULT                <- header row
    I   | Jan. 15, 1967 | Los Angeles Memorial Coliseum | Green Bay 35, Kansas City 10
    ...

This client only extracts raw cell text. Header promotion, type coercion and
everything downstream belong to the pipeline stages.

Failure policy: network errors, non-2xx responses and pages without a table
surface to the caller. There is no retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import ClassVar, Optional

import httpx
import pandas as pd
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


class TableNotFoundError(ValueError):
    """Raised when the fetched HTML has no table at the requested index."""


# ── Response types ─────────────────────────────────────────────────────────────

@dataclass
class RawTable:
    """Typed container for one scraped HTML table."""

    source: str = "espn"
    endpoint: str = ""
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    rows: list[list[str]] = field(default_factory=list)
    is_fixture: bool = False

    def to_frame(self) -> pd.DataFrame:
        """Return the rows as a string DataFrame with integer column labels."""
        return pd.DataFrame(self.rows, dtype="object")


# ── Parsing ────────────────────────────────────────────────────────────────────

def extract_first_table(html: str, table_index: int = 0) -> list[list[str]]:
    """Extract the cell text of one ``<table>`` from an HTML document.

    Every ``<tr>`` becomes a list of stripped cell strings (``<th>`` and
    ``<td>`` alike). Rows narrower than the widest row (e.g. a colspan title
    row) are right-padded with empty strings so the result is rectangular.

    Args:
        html:        Full HTML document.
        table_index: Which table to take, counting from 0 in document order.

    Returns:
        List of rows, each a list of strings.

    Raises:
        TableNotFoundError: If the document has no table at ``table_index``
            or that table has no rows.
    """
    soup = BeautifulSoup(html, "html.parser")
    tables = soup.find_all("table")
    if table_index >= len(tables):
        raise TableNotFoundError(
            f"Expected a table at index {table_index}, found {len(tables)} table(s)."
        )

    rows: list[list[str]] = []
    for tr in tables[table_index].find_all("tr"):
        cells = [cell.get_text(" ", strip=True) for cell in tr.find_all(["td", "th"])]
        if cells:
            rows.append(cells)

    if not rows:
        raise TableNotFoundError(f"Table at index {table_index} has no rows.")

    width = max(len(r) for r in rows)
    return [r + [""] * (width - len(r)) for r in rows]


# ── Client ─────────────────────────────────────────────────────────────────────

class EspnClient:
    """Fetch the Super Bowl results page and pull out its table.

    Usage::

        client = EspnClient(timeout=30.0)
        raw = client.fetch_table(EspnClient.WINNERS_URL)
        frame = raw.to_frame()

    Offline usage (saved page)::

        raw = EspnClient().load_html_file("data/raw/winners.html")

    Args:
        timeout:    Request timeout in seconds.
        user_agent: ``User-Agent`` header; ESPN rejects some default agents.
        transport:  Optional httpx transport, used by tests to mock responses.
    """

    WINNERS_URL: ClassVar[str] = "https://www.espn.com/nfl/superbowl/history/winners"

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "Mozilla/5.0 (X11; Linux x86_64) gridiron-recap/0.1",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    def fetch_html(self, url: str) -> str:
        """GET ``url`` and return the response body as text.

        Raises:
            httpx.HTTPStatusError: On non-2xx response.
            httpx.RequestError:    On connection or timeout failure.
        """
        logger.info("Fetching %s", url)
        with httpx.Client(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            resp = client.get(url)
            resp.raise_for_status()
        logger.debug("Fetched %d bytes from %s", len(resp.content), url)
        return resp.text

    def fetch_table(self, url: str, table_index: int = 0) -> RawTable:
        """Fetch ``url`` and extract the table at ``table_index``.

        Returns:
            RawTable with ``is_fixture=False``.
        """
        html = self.fetch_html(url)
        rows = extract_first_table(html, table_index=table_index)
        logger.info("Extracted %d raw rows from %s", len(rows), url)
        return RawTable(
            source="espn",
            endpoint=url,
            fetched_at=datetime.now(timezone.utc),
            rows=rows,
            is_fixture=False,
        )

    def load_html_file(self, path: str | Path, table_index: int = 0) -> RawTable:
        """Build a ``RawTable`` from a saved HTML page instead of the network.

        Raises:
            FileNotFoundError:  If ``path`` does not exist.
            TableNotFoundError: If the page has no table at ``table_index``.
        """
        path = Path(path)
        html = path.read_text(encoding="utf-8")
        rows = extract_first_table(html, table_index=table_index)
        logger.info("Extracted %d raw rows from %s", len(rows), path)
        return RawTable(
            source="file",
            endpoint=str(path),
            fetched_at=datetime.now(timezone.utc),
            rows=rows,
            is_fixture=True,
        )
