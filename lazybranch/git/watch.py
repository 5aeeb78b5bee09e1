"""Git ref watch signatures.

Hashes stat metadata of the files that change whenever a branch is
created, deleted, moved, or fetched. The event loop polls the signature
and reloads the branch list when it differs.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

_WATCHED_REF_DIRS = ("refs/heads", "refs/remotes")


def _update_digest(digest, token: str) -> None:
    """Append a token plus separator byte to a hash digest."""
    digest.update(token.encode("utf-8", errors="surrogateescape"))
    digest.update(b"\0")


def _path_stat_signature(path: Path) -> tuple[str, int, int, int]:
    """Return a stable stat tuple describing ``path`` existence and metadata."""
    try:
        st = path.stat()
    except FileNotFoundError:
        return ("missing", 0, 0, 0)
    except OSError:
        return ("error", 0, 0, 0)
    return ("ok", st.st_mtime_ns, st.st_size, st.st_mode)


def _ref_files(ref_dir: Path) -> list[tuple[str, Path]]:
    found: list[tuple[str, Path]] = []
    for dirpath, _dirnames, filenames in os.walk(ref_dir):
        for name in filenames:
            path = Path(dirpath) / name
            found.append((path.relative_to(ref_dir).as_posix(), path))
    found.sort()
    return found


def ref_signature(git_dir: Path | None) -> str:
    """Build a digest over HEAD, packed-refs and loose branch refs."""
    digest = hashlib.blake2b(digest_size=20)
    if git_dir is None:
        _update_digest(digest, "git:none")
        return digest.hexdigest()

    git_dir = git_dir.resolve()
    _update_digest(digest, f"git_dir:{git_dir}")

    def add_path_token(label: str, path: Path) -> None:
        state, mtime_ns, size, mode = _path_stat_signature(path)
        _update_digest(digest, f"{label}:{state}:{mtime_ns}:{size}:{mode}")

    add_path_token("head", git_dir / "HEAD")
    add_path_token("packed_refs", git_dir / "packed-refs")

    for ref_root in _WATCHED_REF_DIRS:
        directory = git_dir / ref_root
        add_path_token(f"dir:{ref_root}", directory)
        if not directory.is_dir():
            continue
        for relative, path in _ref_files(directory):
            add_path_token(f"ref:{ref_root}/{relative}", path)

    return digest.hexdigest()
