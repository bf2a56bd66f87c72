"""Wildcard matching for repository-side paths.

A repository path may contain ``*`` (any run of characters within one
path component) and ``?`` (any single character).  The lexer keeps the
backslash in front of escaped wildcards, so ``x\\*y`` names the file
``x*y`` literally.

Patterns are matched one component at a time against the repository
tree: every component but the last must match a directory, the last
must match a file.  Results are sorted so expansion stays deterministic.
"""
from __future__ import annotations

import re
from pathlib import Path, PurePosixPath

from ambit.linker.filesystem import Filesystem


def has_wildcard(path: str) -> bool:
    """Return True if ``path`` contains an unescaped ``*`` or ``?``."""
    escaped = False
    for ch in path:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch in "*?":
            return True
    return False


def unescape(path: str) -> str:
    """Drop the backslashes the lexer kept in front of ``*`` and ``?``."""
    return re.sub(r"\\([*?])", r"\1", path)


def compile_component(component: str) -> re.Pattern[str]:
    """Translate one path component into an anchored regular expression."""
    parts: list[str] = []
    chars = iter(component)
    for ch in chars:
        if ch == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.DOTALL)


def match_pattern(pattern: str, root: Path, fs: Filesystem) -> list[str]:
    """Return every file under ``root`` matching ``pattern``.

    Parameters
    ----------
    pattern:
        ``/``-separated path relative to ``root``.
    root:
        Directory the pattern is anchored at.
    fs:
        Filesystem to read directories from.

    Returns
    -------
    list[str]
        Matching paths relative to ``root``, ``/``-separated, sorted.
    """
    components = [c for c in PurePosixPath(pattern).parts if c not in ("/", ".")]
    candidates: list[Path] = [root]
    for position, component in enumerate(components):
        last = position == len(components) - 1
        if not has_wildcard(component):
            name = unescape(component)
            candidates = [c / name for c in candidates]
            candidates = [c for c in candidates if (fs.is_file(c) if last else fs.is_dir(c))]
            continue
        regex = compile_component(component)
        next_candidates: list[Path] = []
        for directory in candidates:
            for entry in fs.list_dir(directory):
                if not regex.fullmatch(entry.name):
                    continue
                if fs.is_file(entry) if last else fs.is_dir(entry):
                    next_candidates.append(entry)
        candidates = next_candidates
    return sorted(c.relative_to(root).as_posix() for c in candidates)
