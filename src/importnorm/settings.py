#!/usr/bin/env python3
"""Rule options and project settings.

Settings normally come from the lint host as plain mappings:

    settings = {"absolute-imports": {"projectRoot": ["packages/*"]}}
    options = {"onlyPathAliases": True}

They can also be kept in pyproject.toml:

    [tool.importnorm]
    project-root = ["packages/*"]
    only-path-aliases = true
    only-absolute-imports = false
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

SETTINGS_KEY = "absolute-imports"
PROJECT_ROOT_KEY = "projectRoot"
PYPROJECT_SECTION = "importnorm"


class SettingsError(ValueError):
    """Raised when a settings source has values of the wrong type."""


@dataclass(frozen=True)
class RuleOptions:
    """Mode flags for a rule invocation.

    Attributes:
        only_path_aliases: Only ever propose alias-qualified imports.
        only_absolute_imports: Only ever propose base-relative imports.
    """

    only_path_aliases: bool = False
    only_absolute_imports: bool = False

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "RuleOptions":
        """Build options from the host's camelCase option object."""
        options = options or {}
        return cls(
            only_path_aliases=bool(options.get("onlyPathAliases", False)),
            only_absolute_imports=bool(options.get("onlyAbsoluteImports", False)),
        )


@dataclass(frozen=True)
class ProjectSettings:
    """Where to look for project roots.

    Attributes:
        project_root: Glob string or tuple of glob strings, as configured.
        configured: Whether a project root was declared at all. When False,
            roots are found by walking up to the nearest package.json.
    """

    project_root: Union[str, Tuple[str, ...], None] = None
    configured: bool = False

    @classmethod
    def from_mapping(cls, settings: Optional[Mapping[str, Any]]) -> "ProjectSettings":
        """Read the ``absolute-imports`` entry of the host's shared settings.

        A declared ``projectRoot`` counts as configured even when its value is
        unusable; it then simply resolves to no roots.
        """
        section = (settings or {}).get(SETTINGS_KEY)
        if not isinstance(section, Mapping) or PROJECT_ROOT_KEY not in section:
            return cls()

        value = section[PROJECT_ROOT_KEY]
        if isinstance(value, list):
            value = tuple(value)
        return cls(project_root=value, configured=True)


def _load_toml(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    try:
        import tomllib

        return tomllib.loads(content)
    except ImportError:
        import toml

        return toml.loads(content)


def _expect_bool(section: Mapping[str, Any], key: str) -> bool:
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise SettingsError(f"[tool.{PYPROJECT_SECTION}] {key} must be a boolean, got {value!r}")
    return value


def load_settings_from_pyproject(
    config_path: Union[str, Path],
) -> Tuple[ProjectSettings, RuleOptions]:
    """Load settings and options from a pyproject.toml [tool.importnorm] table.

    Args:
        config_path: Path to pyproject.toml.

    Returns:
        Tuple of (ProjectSettings, RuleOptions). Defaults when the file or
        the table is missing.

    Raises:
        SettingsError: If a value has the wrong type.
    """
    path = Path(config_path)
    if not path.exists():
        return ProjectSettings(), RuleOptions()

    section = _load_toml(path).get("tool", {}).get(PYPROJECT_SECTION)
    if section is None:
        return ProjectSettings(), RuleOptions()
    if not isinstance(section, dict):
        raise SettingsError(f"[tool.{PYPROJECT_SECTION}] must be a table")

    settings = ProjectSettings()
    if "project-root" in section:
        root = section["project-root"]
        if isinstance(root, list) and all(isinstance(item, str) for item in root):
            patterns: Union[str, Tuple[str, ...]] = tuple(root)
        elif isinstance(root, str):
            patterns = root
        else:
            raise SettingsError(
                f"[tool.{PYPROJECT_SECTION}] project-root must be a string or list of strings"
            )
        settings = ProjectSettings(project_root=patterns, configured=True)

    options = RuleOptions(
        only_path_aliases=_expect_bool(section, "only-path-aliases"),
        only_absolute_imports=_expect_bool(section, "only-absolute-imports"),
    )
    return settings, options

