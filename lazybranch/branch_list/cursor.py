"""Bounded selection cursor over the filtered view.

Directions are named by list position rather than screen metaphor:
``TOWARD_START`` decreases the index and ``TOWARD_END`` increases it.
"""

from __future__ import annotations

from enum import Enum


class Motion(str, Enum):
    TOWARD_START = "toward_start"
    TOWARD_END = "toward_end"
    PAGE_TOWARD_START = "page_toward_start"
    PAGE_TOWARD_END = "page_toward_end"
    HOME = "home"
    END = "end"


class SelectionCursor:
    """Single-selection index, resolved to ``None`` while the view is empty."""

    def __init__(self) -> None:
        self._index = 0
        self._length = 0

    @property
    def index(self) -> int | None:
        if self._length == 0:
            return None
        return self._index

    @property
    def length(self) -> int:
        return self._length

    def clamp(self, length: int) -> int | None:
        """Re-bound the cursor after the filtered view was rebuilt.

        A cursor past the new end snaps to the last row, not to the first.
        """
        self._length = max(0, length)
        if self._length == 0:
            self._index = 0
            return None
        self._index = max(0, min(self._index, self._length - 1))
        return self._index

    def move(self, motion: Motion, viewport_height: int | None = None) -> bool:
        """Apply ``motion`` and return whether the index changed."""
        if self._length == 0:
            return False
        page = viewport_height if viewport_height and viewport_height > 0 else 0
        if motion is Motion.TOWARD_START:
            target = self._index - 1
        elif motion is Motion.TOWARD_END:
            target = self._index + 1
        elif motion is Motion.PAGE_TOWARD_START:
            target = self._index - page
        elif motion is Motion.PAGE_TOWARD_END:
            target = self._index + page
        elif motion is Motion.HOME:
            target = 0
        else:
            target = self._length - 1
        return self.set(target)

    def set(self, target: int) -> bool:
        if self._length == 0:
            return False
        previous = self._index
        self._index = max(0, min(target, self._length - 1))
        return self._index != previous
