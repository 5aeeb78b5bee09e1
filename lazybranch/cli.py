"""Command-line front door for lazybranch.

Parses CLI options, resolves the repository, and either prints the branch
list (``--list``) or launches the interactive picker.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from .branch_list import ActionKind, ActionRequest, ListController, Partition
from .errors import BackendError, user_facing_error
from .git import GitBackend, ref_signature
from .input import KeyBindings, KeyTranslator
from .logging import DEFAULT_LOG_PATH, LOG_LEVELS, configure_logging
from .runtime.config import load_key_overrides, load_log_file, load_log_level, load_theme_name
from .runtime.render import HASH_COLUMNS, row_prefix
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

_DONE_MESSAGES: dict[ActionKind, str] = {
    ActionKind.CHECKOUT: "Switched to {name}",
    ActionKind.MERGE: "Merged {name}",
    ActionKind.REBASE: "Rebased onto {name}",
}


def render_branch_listing(controller: ListController) -> str:
    """Plain-text listing of the controller's filtered view."""
    out: list[str] = []
    partition = controller.partition
    snapshot = controller.snapshot(max(1, len(controller.filtered_view)))
    for row in snapshot.rows:
        line = f"{row_prefix(row, partition)}{row.display_name}  {row.top_commit[:HASH_COLUMNS]}  {row.summary}"
        out.append(line.rstrip())
        out.append("\n")
    return "".join(out)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pick, filter and act on git branches in the terminal.")
    parser.add_argument("path", nargs="?", default=None, help="Repository path. Defaults to current directory.")
    parser.add_argument("--remote", action="store_true", help="Start on the remote branch list.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=sorted(LOG_LEVELS),
        type=str.upper,
        help="Logging level (default: config value or WARNING).",
    )
    parser.add_argument("--log-file", default=None, help=f"Log file path (default: {DEFAULT_LOG_PATH}).")
    parser.add_argument("--list", action="store_true", help="Print the branch list and exit.")
    parser.add_argument("--query", default="", help="Fuzzy filter applied to --list output.")
    return parser


def _completion_message(request: ActionRequest | None) -> str:
    if request is None:
        return ""
    template = _DONE_MESSAGES.get(request.kind)
    return template.format(name=request.display_name) if template else ""


def main(argv: Sequence[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and run lazybranch against a repository.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = _build_parser().parse_args(argv)

    level = args.log_level or load_log_level() or "WARNING"
    log_file = Path(args.log_file) if args.log_file else load_log_file()

    if default_path is None:
        default_path = Path.cwd()
    repo = Path(args.path or default_path)
    if not repo.exists():
        raise SystemExit(f"Path not found: {repo}")

    partition = Partition.REMOTE if args.remote else Partition.LOCAL
    backend = GitBackend(repo)

    if args.list:
        configure_logging(level, log_file=log_file)
        try:
            backend.ensure_repository()
            controller = ListController(backend, partition=partition)
            controller.open()
            controller.set_query(args.query)
        except BackendError as exc:
            raise SystemExit(user_facing_error(exc)) from exc
        sys.stdout.write(render_branch_listing(controller))
        return

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("lazybranch needs an interactive terminal; use --list for plain output.")

    # The picker owns the terminal, so logs only go to a file.
    configure_logging(level, log_file=log_file or DEFAULT_LOG_PATH, console=False)
    try:
        backend.ensure_repository()
        controller = ListController(backend, partition=partition)
        controller.open()
    except BackendError as exc:
        raise SystemExit(user_facing_error(exc)) from exc

    from .runtime import run_branch_picker
    from .runtime.terminal import TerminalController

    git_dir = backend.git_dir()
    translator = KeyTranslator(KeyBindings.with_overrides(load_key_overrides()))
    theme = resolve_theme(args.theme or load_theme_name(), no_color=args.no_color)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    logger.info("Starting picker repo=%s partition=%s", repo, partition.value)
    finished = run_branch_picker(
        controller,
        backend,
        terminal,
        stdin_fd,
        translator=translator,
        theme=theme,
        source_signature=lambda: ref_signature(git_dir),
    )
    message = _completion_message(finished)
    if message:
        os.write(sys.stdout.fileno(), f"{message}\n".encode("utf-8", errors="replace"))


if __name__ == "__main__":
    main()
