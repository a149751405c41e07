"""
Game model — one row of the derived Super Bowl results table.

``GameRecord`` is the typed boundary between the pandas pipeline and the
outside world: JSON export and tests go through it so every written record is
validated. Inside the pipeline the table stays a DataFrame.

Key invariant: ``spread == abs(score1 - score2)``. A record whose spread
disagrees with its scores is rejected.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator

from gridiron_recap.taxonomy.spread_taxonomy import SpreadCategory


class GameRecord(BaseModel):
    """A single championship game with its derived score fields.

    Attributes:
        game: Event label, e.g. ``"I"`` or ``"LVIII"``.
        date: Calendar date the game was played.
        site: Stadium and/or city.
        team1: First team listed in the result string (the winner).
        score1: Final score of ``team1``.
        team2: Second team listed in the result string.
        score2: Final score of ``team2``.
        spread: Absolute score difference.
        category: Quartile-derived ``SpreadCategory``; ``None`` before labeling.
        overtime: ``True`` when the result string carried an ``(OT)`` marker.
    """

    model_config = ConfigDict(frozen=True)

    game: str
    date: dt.date
    site: str
    team1: str
    score1: int = Field(ge=0)
    team2: str
    score2: int = Field(ge=0)
    spread: int = Field(ge=0)
    category: SpreadCategory | None = None
    overtime: bool = False

    @model_validator(mode="after")
    def validate_spread(self) -> "GameRecord":
        expected = abs(self.score1 - self.score2)
        if self.spread != expected:
            raise ValueError(
                f"spread ({self.spread}) must equal |score1 - score2| ({expected}) "
                f"for game '{self.game}'."
            )
        return self

    @property
    def matchup(self) -> str:
        """``"Green Bay 35, Kansas City 10"`` style display string."""
        suffix = " (OT)" if self.overtime else ""
        return f"{self.team1} {self.score1}, {self.team2} {self.score2}{suffix}"


def records_from_frame(frame: pd.DataFrame) -> list[GameRecord]:
    """Convert a derived results DataFrame into validated ``GameRecord``s.

    Columns absent from ``frame`` (``category``, ``overtime``) fall back to
    the model defaults, so a projected recommendation table converts too.

    Raises:
        pydantic.ValidationError: If any row violates the model constraints.
    """
    records: list[GameRecord] = []
    for row in frame.to_dict(orient="records"):
        records.append(GameRecord(**_clean_row(row)))
    return records


def _clean_row(row: dict[str, Any]) -> dict[str, Any]:
    """Turn pandas scalars into plain Python values pydantic accepts."""
    cleaned: dict[str, Any] = {}
    for key, val in row.items():
        if key not in GameRecord.model_fields:
            continue
        if isinstance(val, pd.Timestamp):
            val = val.date()
        elif hasattr(val, "item"):
            val = val.item()
        cleaned[key] = val
    return cleaned
