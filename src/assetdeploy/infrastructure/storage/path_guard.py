"""Path guardrails for store roots and relative asset paths."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List


_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


class InvalidArtifactPathError(ValueError):
    """Raised when a path is malformed or escapes its root."""


def normalize_path(path: str | Path) -> Path:
    raw = str(path or "").strip()
    if not raw:
        raise InvalidArtifactPathError("path is required")
    expanded = os.path.expandvars(os.path.expanduser(raw))
    return Path(expanded).resolve(strict=False)


def normalize_relative_path(rel_path: str) -> str:
    """Canonical slash-separated form of a store-relative path.

    Backslashes become slashes, empty and ``.`` segments are dropped.
    Absolute paths, drive letters, NUL bytes and ``..`` segments are rejected.
    """
    raw = str(rel_path or "").strip().replace("\\", "/")
    if "\x00" in raw:
        raise InvalidArtifactPathError(f"NUL byte not allowed: {rel_path!r}")
    if raw.startswith("/") or _DRIVE_PATTERN.match(raw):
        raise InvalidArtifactPathError(f"absolute path not allowed: {rel_path!r}")
    segments: List[str] = []
    for segment in raw.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            raise InvalidArtifactPathError(f"path traversal not allowed: {rel_path!r}")
        segments.append(segment)
    return "/".join(segments)


def ensure_within_root(root: str | Path, path: str | Path) -> Path:
    """Ensure `path` is under `root` (inclusive).

    The check is lexical: the final component is never resolved, so a
    symlink inside the root that points elsewhere is still addressable
    (and deletable) as itself.
    """
    root_path = normalize_path(root)
    candidate = Path(os.path.normpath(os.path.join(str(root_path), str(path))))

    try:
        common = os.path.commonpath([str(root_path), str(candidate)])
    except ValueError as exc:
        raise InvalidArtifactPathError(str(exc)) from exc

    if common != str(root_path):
        raise InvalidArtifactPathError(f"path escapes root: {candidate}")
    return candidate


def safe_join(root: str | Path, *parts: str) -> Path:
    base = normalize_path(root)
    candidate = base.joinpath(*parts) if parts else base
    return ensure_within_root(base, candidate)


def ensure_parent_within_root(root: str | Path, path: str | Path) -> Path:
    """Ensure the directory holding `path` resolves inside `root`.

    Complements the lexical check in ``ensure_within_root``: a symlinked
    directory inside the root may not redirect entries outside of it. The
    final component itself is still left unresolved.
    """
    root_path = normalize_path(root)
    candidate = Path(path)
    if candidate == root_path:
        return candidate
    parent = Path(os.path.realpath(str(candidate.parent)))
    if parent != root_path and root_path not in parent.parents:
        raise InvalidArtifactPathError(f"path escapes root through a symlinked directory: {candidate}")
    return candidate
