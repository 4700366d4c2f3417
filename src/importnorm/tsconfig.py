#!/usr/bin/env python3
"""Config Locator & Alias Table Builder.

Finds the tsconfig.json / jsconfig.json that applies to a source file, given
a list of candidate project roots, and extracts what the normalizer needs
from it:
- ``compilerOptions.baseUrl`` as an absolute directory
- ``compilerOptions.paths`` inverted into a source-prefix -> alias table

The lookup result is one of three shapes (see :data:`ConfigLookup`) so
callers handle "nothing found" and "found but broken" explicitly.

Example:
    >>> found = locate_config(['/my/app', '/my/app/packages/web'], '/my/app/packages/web/src/a.ts')
    >>> if isinstance(found, ProjectConfig):
    ...     base_url = get_base_url(found)
    ...     aliases = import_prefix_to_alias(get_paths(found))
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .jsonc import ParseError, parse_jsonc

logger = logging.getLogger(__name__)

# Probe order matters: a later file in the same root replaces an earlier one.
CONFIG_FILE_NAMES = ("tsconfig.json", "jsconfig.json")

_PARENT_STEP = ".." + os.sep


@dataclass(frozen=True)
class ConfigNotFound:
    """No configuration file applies to the file."""


@dataclass
class MalformedConfig:
    """A configuration file that could not be parsed.

    Attributes:
        path: Absolute path of the offending file.
        errors: Parse errors, in file order.
    """

    path: str
    errors: List[ParseError] = field(default_factory=list)

    def describe(self) -> str:
        """One-line diagnostic suitable for showing to a user."""
        details = "; ".join(str(error) for error in self.errors)
        return f"Could not parse {self.path}: {details}"


@dataclass
class ProjectConfig:
    """A parsed configuration and the directory it lives in."""

    root: str
    data: Any
    path: str = ""


ConfigLookup = Union[ConfigNotFound, MalformedConfig, ProjectConfig]


def common_path_segment_count(root: str, file_path: str) -> int:
    """Score how specific ``root`` is for ``file_path``.

    Starts from the number of segments in ``root`` and subtracts one for
    every parent step needed to walk from ``root`` to ``file_path``.
    """
    relative = os.path.relpath(file_path, root)
    return len(root.split(os.sep)) - relative.count(_PARENT_STEP)


def read_config(path: str) -> Union[MalformedConfig, Any]:
    """Read and parse one configuration file.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    with open(path, encoding="utf-8") as f:
        content = f.read()

    data, errors = parse_jsonc(content)
    if errors:
        return MalformedConfig(path=path, errors=errors)
    return data


def locate_config(candidate_roots: List[str], file_path: str) -> ConfigLookup:
    """Find the most specific configuration for a source file.

    Roots are scored with :func:`common_path_segment_count`. Only a root
    scoring strictly higher than the current best is probed, so ties keep the
    earlier root. A parse failure stops the search immediately.

    Args:
        candidate_roots: Candidate project roots, in priority order.
        file_path: Absolute path of the file being checked.

    Returns:
        ProjectConfig, MalformedConfig or ConfigNotFound.
    """
    best_score = 0
    best: ConfigLookup = ConfigNotFound()

    for root in candidate_roots:
        score = common_path_segment_count(root, file_path)
        if score <= best_score:
            continue

        for name in CONFIG_FILE_NAMES:
            config_path = os.path.join(root, name)
            if not os.path.exists(config_path):
                continue

            parsed = read_config(config_path)
            if isinstance(parsed, MalformedConfig):
                logger.warning(parsed.describe())
                return parsed

            best = ProjectConfig(root=root, data=parsed, path=config_path)
            best_score = score

    if isinstance(best, ProjectConfig):
        logger.debug(f"Using {best.path} for {file_path}")
    return best


def _compiler_option(config: ProjectConfig, name: str) -> Any:
    options = config.data.get("compilerOptions") if isinstance(config.data, dict) else None
    if not isinstance(options, dict):
        return None
    return options.get(name)


def get_base_url(config: ProjectConfig) -> Optional[str]:
    """Absolute base URL of a configuration, or None if it declares none."""
    base_url = _compiler_option(config, "baseUrl")
    if not isinstance(base_url, str):
        return None
    return os.path.normpath(os.path.join(config.root, base_url))


def get_paths(config: ProjectConfig) -> Dict[str, List[str]]:
    """Return ``compilerOptions.paths`` with unusable entries dropped.

    Keys whose value is not a list are skipped, as are non-string items
    inside a list.
    """
    declared = _compiler_option(config, "paths")
    if not isinstance(declared, dict):
        return {}

    paths: Dict[str, List[str]] = {}
    for alias, targets in declared.items():
        if isinstance(targets, list):
            paths[alias] = [target for target in targets if isinstance(target, str)]
    return paths


def import_prefix_to_alias(paths: Dict[str, List[str]]) -> Dict[str, str]:
    """Invert an alias table into source-pattern -> alias-pattern.

    Each target of each alias becomes one entry. A target declared under
    several aliases maps to the last of them but keeps its first position.

    Example:
        >>> import_prefix_to_alias({"@/*": ["src/*"], "~/*": ["shared/*", "src/*"]})
        {'src/*': '~/*', 'shared/*': '~/*'}
    """
    reversed_paths: Dict[str, str] = {}
    for alias, targets in paths.items():
        for target in targets:
            reversed_paths[target] = alias
    return reversed_paths
