#!/usr/bin/env python3
"""Project Root Resolver - turn a project-root setting into candidate roots.

A project-root setting is a glob string, a list of glob strings, or absent.
Configured globs are expanded relative to the working directory and the
result is memoized per pattern list for the rest of the process. Without a
setting, the nearest ancestor directory holding a ``package.json`` is used.

Example:
    >>> project_root_options(["packages/*"])
    ['/my/monorepo/packages/api', '/my/monorepo/packages/web']
    >>> fallback_project_root('/my/app/src/components')
    '/my/app'
"""

import logging
import os
import threading
from typing import Any, Callable, Dict, List, Optional

from .glob_walker import expand_glob

logger = logging.getLogger(__name__)

PACKAGE_MARKER = "package.json"


class RootCache:
    """Process-lifetime memo of expanded project-root patterns.

    Entries are keyed by the order-preserving join of the pattern list and
    are never invalidated implicitly; call :meth:`clear` to start over.

    Attributes:
        expander: Function used to expand a single glob pattern.
        misses: Number of times the expander was consulted for a key.
    """

    def __init__(self, expander: Callable[[str], List[str]] = None):
        self.expander = expander or expand_glob
        self.misses = 0
        self._entries: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key_for(patterns: List[str]) -> str:
        return os.pathsep.join(patterns)

    def get(self, patterns: List[str]) -> List[str]:
        """Return the roots for ``patterns``, expanding them on first use."""
        key = self.key_for(patterns)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                logger.debug(f"Project roots cache hit for {key!r}")
                return list(cached)

            self.misses += 1
            roots: List[str] = []
            for pattern in patterns:
                roots.extend(self.expander(pattern))
            self._entries[key] = roots
            logger.debug(f"Resolved {len(roots)} project root(s) for {key!r}")
            return list(roots)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


_default_cache = RootCache()


def default_root_cache() -> RootCache:
    return _default_cache


def clear_root_cache() -> None:
    """Reset the shared project-root cache."""
    _default_cache.clear()


def normalize_root_patterns(setting: Any) -> List[str]:
    """Turn a raw project-root setting into a list of glob patterns.

    Strings become a one-element list, lists keep only their string entries
    and anything else gives an empty list.
    """
    if isinstance(setting, str):
        return [setting]
    if isinstance(setting, (list, tuple)):
        return [item for item in setting if isinstance(item, str)]
    return []


def project_root_options(setting: Any, cache: Optional[RootCache] = None) -> List[str]:
    """Expand a configured project-root setting into candidate directories.

    Args:
        setting: Glob string or list of glob strings.
        cache: Cache to consult (defaults to the shared process cache).

    Returns:
        Concatenated expansion of every pattern, in pattern order.
    """
    cache = cache if cache is not None else _default_cache
    return cache.get(normalize_root_patterns(setting))


def fallback_project_root(file_dir: str, marker: str = PACKAGE_MARKER) -> Optional[str]:
    """Find the nearest ancestor (inclusive) containing ``marker``.

    The filesystem root is where the ascent stops; it is never probed.

    Args:
        file_dir: Directory of the file being checked.
        marker: Name of the file whose presence marks a project root.

    Returns:
        The directory path, or None if no ancestor holds the marker.
    """
    current = os.path.abspath(file_dir)
    while True:
        parent = os.path.dirname(current)
        if parent == current:
            return None
        if os.path.exists(os.path.join(current, marker)):
            return current
        current = parent


def resolve_roots(
    setting: Any,
    file_dir: str,
    *,
    configured: bool,
    cache: Optional[RootCache] = None,
) -> List[str]:
    """Return the candidate project roots for a file.

    Args:
        setting: Raw project-root setting from the lint host.
        file_dir: Directory containing the file being checked.
        configured: Whether the host declared a project-root setting at all.
            A declared but unusable setting does not fall back.
        cache: Cache for configured patterns.

    Returns:
        Candidate root directories; empty when nothing applies.
    """
    if configured:
        return project_root_options(setting, cache=cache)

    fallback = fallback_project_root(file_dir)
    if fallback is None:
        logger.debug(f"No {PACKAGE_MARKER} found above {file_dir}")
        return []
    return [fallback]
