"""Error types shared by the branch list core and its git collaborators."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LazyBranchError(Exception):
    message: str
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} ({self.hint})"
        return self.message


class OutOfRange(LazyBranchError, IndexError):
    """Index misuse inside the list core. Always a programming defect."""


class NoSelection(LazyBranchError):
    """An action was requested while the filtered view is empty."""


class ActionUnavailable(LazyBranchError):
    """The selected entry does not support the requested action."""


class BackendError(LazyBranchError):
    """A git command failed; reported to the user, never retried."""


def user_facing_error(error: LazyBranchError) -> str:
    if error.hint:
        return f"{error.message}: {error.hint}"
    return error.message
