"""Public runtime entry points.

This package groups the interactive picker loop and the terminal, prompt
and rendering pieces it drives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import PickerLoopTiming


def run_branch_picker(*args, **kwargs):
    """Lazily import the loop runner; it pulls in termios-backed helpers."""
    from .loop import run_branch_picker as _run_branch_picker

    return _run_branch_picker(*args, **kwargs)


def __getattr__(name: str):
    if name == "PickerLoopTiming":
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "PickerLoopTiming",
    "run_branch_picker",
]
