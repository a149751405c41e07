"""
FetchStage — retrieve the results page and return its first table, unparsed.

Output is a DataFrame of strings with integer column labels; row 0 is the
page's title row and row 1 the header row. ``NormalizeStage`` deals with both.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx
import pandas as pd

from gridiron_recap.ingestion.espn_client import EspnClient
from gridiron_recap.models.meta import RunMetadata
from gridiron_recap.pipeline.base import PipelineStage

logger = logging.getLogger(__name__)


class FetchStage(PipelineStage):
    """Fetch the configured URL (or read a saved page) into a raw table."""

    stage_name = "fetch"

    def _execute(
        self,
        run: RunMetadata,
        html_file: Optional[str | Path] = None,
        transport: Optional[httpx.BaseTransport] = None,
        **kwargs,
    ) -> pd.DataFrame:
        """Fetch the raw table.

        Args:
            run:       In-progress run record (unused).
            html_file: Read this saved page instead of hitting the network.
            transport: Optional httpx transport (tests).

        Returns:
            Raw string DataFrame, one row per ``<tr>``.
        """
        source = self.config.source
        client = EspnClient(
            timeout=source.timeout_seconds,
            user_agent=source.user_agent,
            transport=transport,
        )

        if html_file is not None:
            raw = client.load_html_file(html_file, table_index=source.table_index)
        else:
            raw = client.fetch_table(source.url, table_index=source.table_index)

        frame = raw.to_frame()
        logger.info(
            "FetchStage: %d rows x %d columns from %s (fixture=%s)",
            frame.shape[0], frame.shape[1], raw.endpoint, raw.is_fixture,
        )
        return frame
