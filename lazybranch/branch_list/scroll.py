"""Vertical scroll offset that keeps the cursor row on screen."""

from __future__ import annotations


def max_scroll_offset(length: int, viewport_height: int) -> int:
    """Return the largest valid offset for ``length`` rows in the viewport."""
    return max(0, length - max(1, viewport_height))


def scroll_offset_for(current: int, cursor: int | None, length: int, viewport_height: int) -> int:
    """Return the offset after the smallest shift that shows ``cursor``.

    The result never re-centers: a cursor above the viewport lands on the
    first row, one below it lands on the last row.
    """
    if viewport_height <= 0 or length <= viewport_height:
        return 0
    offset = current
    if cursor is not None:
        if cursor < offset:
            offset = cursor
        elif cursor >= offset + viewport_height:
            offset = cursor - viewport_height + 1
    return max(0, min(offset, max_scroll_offset(length, viewport_height)))


class ViewportScroller:
    def __init__(self) -> None:
        self.offset = 0
        self.viewport_height = 0

    def update(self, cursor: int | None, length: int, viewport_height: int | None = None) -> int:
        if viewport_height is not None:
            self.viewport_height = max(0, viewport_height)
        self.offset = scroll_offset_for(self.offset, cursor, length, self.viewport_height)
        return self.offset

    def peek(self, cursor: int | None, length: int, viewport_height: int) -> int:
        """Compute the offset for another height without storing it."""
        return scroll_offset_for(self.offset, cursor, length, viewport_height)

    def reset(self) -> None:
        self.offset = 0


def scrollbar_thumb(offset: int, total: int, viewport_height: int) -> tuple[int, int] | None:
    """Return ``(start_row, size)`` of the scrollbar thumb, or ``None`` if all rows fit."""
    if viewport_height <= 0 or total <= viewport_height:
        return None
    size = max(1, (viewport_height * viewport_height) // total)
    travel = viewport_height - size
    max_offset = max_scroll_offset(total, viewport_height)
    clamped = max(0, min(offset, max_offset))
    start = (clamped * travel + max_offset // 2) // max_offset if max_offset else 0
    return start, size
