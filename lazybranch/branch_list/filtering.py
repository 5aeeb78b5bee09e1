"""Build the filtered view over the item store for one query."""

from __future__ import annotations

from collections.abc import Sequence

from ..search.fuzzy import fuzzy_match_labels, is_blank_query
from .types import Entry, FilteredEntry


def filter_entries(entries: Sequence[Entry], query: str) -> list[FilteredEntry]:
    """Return the ranked view of ``entries`` for ``query``.

    A blank query yields the identity mapping without scores.
    """
    if is_blank_query(query):
        return [FilteredEntry(source_index=idx) for idx in range(len(entries))]

    matched = fuzzy_match_labels(query, [entry.display_name for entry in entries])
    return [
        FilteredEntry(source_index=idx, match_score=score, match_positions=frozenset(positions))
        for idx, score, positions in matched
    ]
