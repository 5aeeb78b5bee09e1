"""Git access for the branch picker."""

from .backend import GitBackend
from .watch import ref_signature

__all__ = ["GitBackend", "ref_signature"]
