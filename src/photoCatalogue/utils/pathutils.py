"""Utilities for working with filesystem paths inside photoCatalogue."""

from __future__ import annotations

import fnmatch
import re
from pathlib import Path
from typing import Iterable, Iterator


def _expand(pattern: str) -> Iterator[str]:
    match = re.search(r"\{([^{}]*,[^{}]*)\}", pattern)
    if not match:
        yield pattern
        return
    prefix = pattern[: match.start()]
    suffix = pattern[match.end() :]
    for option in match.group(1).split(","):
        yield from _expand(prefix + option + suffix)


def _matches_any(rel: str, globs: Iterable[str]) -> bool:
    for pattern in globs:
        for expanded in _expand(pattern):
            if fnmatch.fnmatchcase(rel, expanded):
                return True
            # ``**/`` also matches zero directories, so a file directly in the
            # root satisfies ``**/*.txt``.
            if expanded.startswith("**/") and fnmatch.fnmatchcase(rel, expanded[3:]):
                return True
    return False


def is_excluded(path: Path, globs: Iterable[str], *, root: Path) -> bool:
    """Return ``True`` if *path* should be excluded based on *globs*.

    The function works on relative POSIX-style paths to provide consistent
    behaviour across operating systems.
    """

    rel = path.relative_to(root).as_posix()
    return _matches_any(rel, globs)


def should_include(path: Path, include_globs: Iterable[str], exclude_globs: Iterable[str], *, root: Path) -> bool:
    """Return ``True`` if *path* should be scanned."""

    if is_excluded(path, exclude_globs, root=root):
        return False
    rel = path.relative_to(root).as_posix()
    return _matches_any(rel, include_globs)


def combine_paths(base: str, tail: str) -> str:
    """Join two POSIX path strings with exactly one separator between them."""

    if not base:
        return tail
    if not tail:
        return base
    return f"{base.rstrip('/')}/{tail.lstrip('/')}"


def remove_path_prefix(path: str, prefix: str) -> str:
    """Return *path* relative to *prefix* when it starts with it.

    The result never starts with a separator. Paths outside *prefix* are
    returned unchanged.
    """

    if not prefix:
        return path
    normalised_prefix = prefix.rstrip("/")
    if path == normalised_prefix:
        return ""
    if path.startswith(normalised_prefix + "/"):
        return path[len(normalised_prefix) :].lstrip("/")
    return path


__all__ = [
    "combine_paths",
    "is_excluded",
    "remove_path_prefix",
    "should_include",
]
