"""Git collaborator for the branch list: listings and branch actions.

Every git call goes through an injectable ``runner`` with the
``subprocess.run`` signature so tests can script git's responses.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from ..branch_list.intents import ActionKind, ActionRequest
from ..branch_list.types import Entry, EntryFlags, Partition
from ..errors import BackendError

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]

_FIELD_SEP = "%00"
_REF_FORMAT = _FIELD_SEP.join(
    [
        "%(refname)",
        "%(refname:short)",
        "%(HEAD)",
        "%(upstream)",
        "%(objectname:short=8)",
        "%(contents:subject)",
    ]
)
_PARTITION_REFS = {
    Partition.LOCAL: "refs/heads",
    Partition.REMOTE: "refs/remotes",
}
# Commands that page output to the user's terminal instead of being captured.
_INTERACTIVE_ACTIONS = frozenset({ActionKind.INSPECT_TARGET, ActionKind.COMPARE})


def _parse_ref_lines(output: str) -> list[list[str]]:
    records: list[list[str]] = []
    for line in output.splitlines():
        if not line:
            continue
        fields = line.split("\0")
        if len(fields) < 6:
            continue
        records.append(fields[:6])
    return records


def _short_local_name(identifier: str | None, fallback: str) -> str:
    if identifier and identifier.startswith("refs/heads/"):
        return identifier[len("refs/heads/") :]
    return fallback


class GitBackend:
    def __init__(self, repo: str | Path, runner: Runner = subprocess.run) -> None:
        self.repo = Path(repo)
        self.runner = runner

    def _command(self, args: list[str]) -> list[str]:
        return ["git", "-C", str(self.repo), *args]

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        cmd = self._command(args)
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = self.runner(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise BackendError("git could not be started", hint=str(exc)) from exc
        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            logger.warning("git %s failed rc=%s stderr=%s", args[0], proc.returncode, stderr)
            raise BackendError(f"git {args[0]} failed", hint=stderr)
        return proc

    def _run_interactive(self, args: list[str]) -> None:
        cmd = self._command(args)
        logger.debug("Running interactively %s", " ".join(cmd))
        try:
            proc = self.runner(cmd, check=False)
        except OSError as exc:
            raise BackendError("git could not be started", hint=str(exc)) from exc
        if proc.returncode != 0:
            raise BackendError(f"git {args[0]} exited with status {proc.returncode}")

    def ensure_repository(self) -> None:
        proc = self.runner(
            self._command(["rev-parse", "--is-inside-work-tree"]),
            capture_output=True,
            text=True,
            check=False,
        )
        if proc.returncode != 0:
            logger.error("Repository is not accessible repo=%s", self.repo)
            raise BackendError(
                f"not a git repository: {self.repo}",
                hint="run lazybranch inside a work tree or pass its path",
            )

    def git_dir(self) -> Path | None:
        try:
            proc = self._run(["rev-parse", "--absolute-git-dir"])
        except BackendError:
            return None
        text = proc.stdout.strip()
        return Path(text) if text else None

    def _tracked_upstreams(self) -> set[str]:
        proc = self._run(["for-each-ref", "--format=%(upstream)", _PARTITION_REFS[Partition.LOCAL]])
        return {line.strip() for line in proc.stdout.splitlines() if line.strip()}

    def list_entries(self, partition: Partition) -> list[Entry]:
        """Return every branch in ``partition`` in git's ref order.

        Remote listings skip the symbolic ``<remote>/HEAD`` ref.
        """
        proc = self._run(["for-each-ref", f"--format={_REF_FORMAT}", _PARTITION_REFS[partition]])
        tracked = self._tracked_upstreams() if partition is Partition.REMOTE else set()

        entries: list[Entry] = []
        for refname, short, head_marker, upstream, commit, subject in _parse_ref_lines(proc.stdout):
            if partition is Partition.REMOTE:
                if refname.endswith("/HEAD"):
                    continue
                flags = EntryFlags(has_tracking=refname in tracked)
            else:
                flags = EntryFlags(is_head=head_marker.strip() == "*", has_upstream=bool(upstream))
            entries.append(
                Entry(
                    identifier=refname,
                    display_name=short,
                    summary=subject,
                    flags=flags,
                    top_commit=commit,
                )
            )
        logger.debug("Listed %d %s branches repo=%s", len(entries), partition.value, self.repo)
        return entries

    def _action_args(self, request: ActionRequest, new_name: str | None) -> list[str]:
        name = request.display_name
        local = request.partition is Partition.LOCAL
        kind = request.kind
        if kind is ActionKind.CHECKOUT:
            if local:
                return ["checkout", _short_local_name(request.identifier, name)]
            return ["checkout", "--track", name]
        if kind is ActionKind.MERGE:
            return ["merge", name]
        if kind is ActionKind.REBASE:
            return ["rebase", name]
        if kind is ActionKind.RENAME:
            if not new_name:
                raise BackendError("rename needs a new branch name")
            return ["branch", "-m", _short_local_name(request.identifier, name), new_name]
        if kind is ActionKind.DELETE:
            if local:
                return ["branch", "-D", _short_local_name(request.identifier, name)]
            remote, _, branch = name.partition("/")
            if not branch:
                raise BackendError(f"cannot tell remote from branch in {name!r}")
            return ["push", remote, "--delete", branch]
        if kind is ActionKind.CREATE:
            if not new_name:
                raise BackendError("create needs a branch name")
            return ["checkout", "-b", new_name]
        if kind is ActionKind.FETCH_REMOTES:
            return ["fetch", "--all", "--prune"]
        target = request.top_commit or name
        if kind is ActionKind.INSPECT_TARGET:
            return ["show", "--stat", "--patch", target]
        return ["diff", "HEAD", target]

    def perform_action(self, request: ActionRequest, new_name: str | None = None) -> None:
        """Run the git command for ``request``; raises :class:`BackendError` on failure."""
        args = self._action_args(request, new_name)
        logger.info("Performing %s on %s", request.kind.value, request.identifier or request.partition.value)
        if request.kind in _INTERACTIVE_ACTIONS:
            self._run_interactive(args)
            return
        self._run(args)

    @staticmethod
    def is_interactive(request: ActionRequest) -> bool:
        return request.kind in _INTERACTIVE_ACTIONS
