"""
Spread taxonomy for Super Bowl results.

Every game is placed in one of three buckets by comparing its final-score
spread against the first and third quartiles of the whole spread column:

  - ``SpreadCategory.CLOSE``    — spread at or below Q1
  - ``SpreadCategory.STANDARD`` — strictly between Q1 and Q3
  - ``SpreadCategory.BLOWOUT``  — spread at or above Q3

The label strings (including the capitalised ``"Standard"``) are part of the
exported data contract; do not change them.

This module has NO imports from any other ``gridiron_recap`` package.
"""

from enum import StrEnum


class SpreadCategory(StrEnum):
    """How lopsided a game's final score was relative to all other games."""

    CLOSE = "close"
    """Spread <= Q1; these are the rewatch candidates."""

    STANDARD = "Standard"
    """Default label for everything between the quartile thresholds."""

    BLOWOUT = "blowout"
    """Spread >= Q3. Wins ties with ``CLOSE`` when Q1 == Q3."""
