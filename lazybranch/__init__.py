"""Public package surface for lazybranch.

Exports ``main`` for programmatic CLI invocation.
The branch list core lives in ``lazybranch.branch_list``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
