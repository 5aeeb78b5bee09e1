"""Fuzzy label matching used by the branch filter."""

from __future__ import annotations

from .fuzzy import (
    FUZZY_SCORE_CEILING,
    SUBSTRING_SCORE_FLOOR,
    fuzzy_match_labels,
    fuzzy_score,
    is_blank_query,
    match_label,
)

__all__ = [
    "FUZZY_SCORE_CEILING",
    "SUBSTRING_SCORE_FLOOR",
    "fuzzy_match_labels",
    "fuzzy_score",
    "is_blank_query",
    "match_label",
]
