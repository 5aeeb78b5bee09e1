from __future__ import annotations

from collections.abc import Sequence

BOUNDARY_CHARS = "/_- ."
BOUNDARY_BONUS = 35
SUBSTRING_SCORE_BASE = 10_000
SUBSTRING_SCORE_FLOOR = 5_000
FUZZY_SCORE_CEILING = SUBSTRING_SCORE_FLOOR - 1

LabelMatch = tuple[int, int, tuple[int, ...]]


def is_blank_query(query: str) -> bool:
    return not query.strip()


def _fold_chars(text: str) -> list[str]:
    # Fold per character so offsets keep pointing into the unfolded label.
    return [ch.casefold() for ch in text]


def _is_word_boundary(label_folded: list[str], idx: int) -> bool:
    return idx == 0 or label_folded[idx - 1] in BOUNDARY_CHARS


def _find_run(query_folded: list[str], label_folded: list[str], start: int = 0) -> int:
    width = len(query_folded)
    for idx in range(start, len(label_folded) - width + 1):
        if label_folded[idx : idx + width] == query_folded:
            return idx
    return -1


def _substring_match(query_folded: list[str], label_folded: list[str]) -> tuple[int, tuple[int, ...]] | None:
    idx = _find_run(query_folded, label_folded)
    if idx < 0:
        return None
    score = SUBSTRING_SCORE_BASE - (idx * 50) - len(label_folded)
    if _is_word_boundary(label_folded, idx):
        score += BOUNDARY_BONUS
    positions = tuple(range(idx, idx + len(query_folded)))
    return max(SUBSTRING_SCORE_FLOOR, score), positions


def _subsequence_match(query_folded: list[str], label_folded: list[str]) -> tuple[int, tuple[int, ...]] | None:
    score = 0
    prev_idx = -1
    run = 0
    positions: list[int] = []
    for needle in query_folded:
        idx = prev_idx + 1
        while idx < len(label_folded) and label_folded[idx] != needle:
            idx += 1
        if idx >= len(label_folded):
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if _is_word_boundary(label_folded, idx):
            score += BOUNDARY_BONUS
        positions.append(idx)
        prev_idx = idx

    score -= len(label_folded) // 5
    return min(FUZZY_SCORE_CEILING, score), tuple(positions)


def match_label(query: str, label: str) -> tuple[int, tuple[int, ...]] | None:
    """Score ``label`` against ``query`` and report the matched offsets.

    Labels holding the query as one contiguous run score in the substring tier,
    which is floored above the ceiling of scattered subsequence matches. A
    contiguous hit therefore never ranks below a scattered one. Returns ``None``
    when the query characters do not appear in order.
    """
    if is_blank_query(query):
        return 0, ()
    query_folded = _fold_chars(query)
    label_folded = _fold_chars(label)
    matched = _substring_match(query_folded, label_folded)
    if matched is not None:
        return matched
    return _subsequence_match(query_folded, label_folded)


def fuzzy_score(query: str, candidate: str) -> int | None:
    matched = match_label(query, candidate)
    if matched is None:
        return None
    return matched[0]


def fuzzy_match_labels(query: str, labels: Sequence[str]) -> list[LabelMatch]:
    """Return ``(label_index, score, positions)`` for every matching label.

    Results are ordered by score descending. ``list.sort`` is stable, so equal
    scores keep their input order.
    """
    scored: list[LabelMatch] = []
    for idx, label in enumerate(labels):
        matched = match_label(query, label)
        if matched is None:
            continue
        score, positions = matched
        scored.append((idx, score, positions))
    scored.sort(key=lambda item: -item[1])
    return scored
