#!/usr/bin/env python3
"""Glob Walker - expand slash-separated globs against the real filesystem.

Supports three kinds of segments:
- Literal names (``packages``, ``web``)
- ``*`` for exactly one directory level
- ``**`` for zero or more directory levels

Unlike :mod:`glob`, the walk is done one segment at a time over a working set
of concrete paths, so a literal segment never lists a directory and ``**``
keeps the directory it starts from.

Example:
    >>> expand_glob("packages/*", "/my/monorepo")
    ['/my/monorepo/packages/api', '/my/monorepo/packages/web']
"""

import logging
import os
import stat
from typing import List, Optional

logger = logging.getLogger(__name__)

SINGLE_LEVEL = "*"
ANY_LEVELS = "**"


def expand_glob(pattern: str, start_dir: Optional[str] = None) -> List[str]:
    """Expand a glob pattern into the paths it matches.

    Args:
        pattern: Slash-separated pattern (e.g. "apps/*", "**/frontend").
        start_dir: Directory the pattern is relative to. Defaults to the
            current working directory.

    Returns:
        Matching paths in walk order. Duplicates are possible when several
        ``**`` segments reach the same path.

    Raises:
        OSError: If a path proven to exist disappears before it is listed.
    """
    if start_dir is not None and not os.path.exists(start_dir):
        return []

    paths = [start_dir if start_dir is not None else os.path.abspath(os.curdir)]

    for segment in pattern.split("/"):
        if segment == SINGLE_LEVEL:
            paths = _expand_single_level(paths)
        elif segment == ANY_LEVELS:
            paths = _expand_any_levels(paths)
        else:
            paths = _expand_literal(paths, segment)

    logger.debug(f"Glob {pattern!r} matched {len(paths)} path(s)")
    return paths


def _expand_literal(paths: List[str], segment: str) -> List[str]:
    """Join a literal segment, keeping only joins that exist."""
    expanded = []
    for path in paths:
        # Empty, "." and ".." segments collapse here, as in a normalized join
        candidate = os.path.normpath(os.path.join(path, segment))
        if os.path.exists(candidate):
            expanded.append(candidate)
    return expanded


def _is_directory(path: str) -> bool:
    # Raises for a candidate that vanished since it was matched.
    return stat.S_ISDIR(os.stat(path).st_mode)


def _list_children(path: str) -> List[str]:
    # No existence check: callers only pass paths already known to exist.
    return [os.path.join(path, name) for name in sorted(os.listdir(path))]


def _expand_single_level(paths: List[str]) -> List[str]:
    """Replace every directory with its direct children."""
    expanded = []
    for path in paths:
        if not _is_directory(path):
            continue
        expanded.extend(_list_children(path))
    return expanded


def _expand_any_levels(paths: List[str]) -> List[str]:
    """Replace every directory with itself plus its whole subtree."""
    expanded = []
    for path in paths:
        if not _is_directory(path):
            continue
        expanded.append(path)
        expanded.extend(_descendants(path))
    return expanded


def _descendants(directory: str) -> List[str]:
    found = []
    for child in _list_children(directory):
        found.append(child)
        if _is_directory(child):
            found.extend(_descendants(child))
    return found
