#!/usr/bin/env python3
"""Import Path Normalizer - compute the import string a file should use.

Given the absolute on-disk target of an import, the base URL and the
inverted alias table, decide the canonical import:
- an alias-qualified path (``@utils/format``) when a source prefix matches
- otherwise the path relative to the base URL (``components/Button``)
- or nothing, when the target lies outside the base URL

Example:
    >>> get_expected_path('/proj/src/utils/format.ts', '/proj/src', {'utils/*': '@utils/*'})
    '@utils/format.ts'
"""

import os
import posixpath
from typing import Dict, Optional

WILDCARD_SUFFIX = "/*"


def strip_wildcard(pattern: str) -> str:
    """Drop a trailing ``/*`` from an alias or source pattern."""
    if pattern.endswith(WILDCARD_SUFFIX):
        return pattern[: -len(WILDCARD_SUFFIX)]
    return pattern


def relative_to_base(absolute_path: str, base_url: str) -> str:
    """Path of ``absolute_path`` relative to ``base_url``, using ``/``."""
    relative = os.path.relpath(absolute_path, base_url)
    return relative.replace(os.sep, posixpath.sep)


def escapes_base(relative: str) -> bool:
    return relative == posixpath.pardir or relative.startswith(posixpath.pardir + posixpath.sep)


def get_expected_path(
    absolute_path: str,
    base_url: str,
    import_prefix_to_alias: Dict[str, str],
    only_path_aliases: bool = False,
    only_absolute_imports: bool = False,
) -> Optional[str]:
    """Compute the import string a correct import of ``absolute_path`` uses.

    Alias prefixes are matched as plain string prefixes in table order, so
    ``src/comp`` also matches ``src/component`` and the first entry wins
    even when a later one is longer.

    Args:
        absolute_path: Normalized absolute target of the import.
        base_url: Absolute base URL of the project configuration.
        import_prefix_to_alias: Source pattern -> alias pattern table.
        only_path_aliases: Never propose a plain base-relative path.
        only_absolute_imports: Never propose an alias.

    Returns:
        The expected import string, or None to leave the import alone.
    """
    relative = relative_to_base(absolute_path, base_url)
    if relative == posixpath.curdir or escapes_base(relative):
        return None

    if not only_absolute_imports:
        for source_pattern, alias_pattern in import_prefix_to_alias.items():
            prefix = strip_wildcard(source_pattern)
            if relative.startswith(prefix):
                return strip_wildcard(alias_pattern) + relative[len(prefix) :]

    if not only_path_aliases:
        return relative

    return None
