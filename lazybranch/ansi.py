"""ANSI-aware text measurement and truncation utilities.

Widths are measured in terminal columns, not characters, so wide glyphs are
never split and combining marks stay attached to their base character.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
ELLIPSIS = "..."


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the column width of plain ``text`` (escape sequences removed)."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def take_columns(text: str, max_cols: int) -> int:
    """Return how many leading characters of ``text`` fit in ``max_cols`` columns."""
    col = 0
    count = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        col += w
        count += 1
    return count


def truncate_to_width(text: str, max_cols: int, ellipsis: str = ELLIPSIS) -> str:
    """Shorten plain ``text`` to ``max_cols`` columns, marking the cut with ``ellipsis``.

    Text that already fits is returned unchanged. When even the ellipsis does
    not fit, the ellipsis itself is clipped to ``max_cols``.
    """
    if max_cols <= 0:
        return ""
    if display_width(text) <= max_cols:
        return text
    marker_cols = display_width(ellipsis)
    if marker_cols >= max_cols:
        return ellipsis[: take_columns(ellipsis, max_cols)]
    kept = take_columns(text, max_cols - marker_cols)
    return text[:kept] + ellipsis


def pad_to_width(text: str, width: int) -> str:
    """Right-pad ``text`` with spaces to exactly ``width`` columns when shorter."""
    missing = width - display_width(text)
    if missing <= 0:
        return text
    return text + " " * missing


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if ch == "\t":
            if col + w > max_cols:
                break
            out.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    # Keep trailing escape sequences (usually resets) that follow the last glyph.
    while i < n and text[i] == "\x1b":
        match = ANSI_ESCAPE_RE.match(text, i)
        if not match:
            break
        out.append(match.group(0))
        i = match.end()

    return "".join(out)
