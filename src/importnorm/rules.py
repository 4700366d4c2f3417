#!/usr/bin/env python3
"""Per-file entry point used by the lint host.

The host builds one :class:`ImportChecker` per source file and then calls
:meth:`ImportChecker.check` for every import literal in it. Everything that
only depends on the file (candidate roots, project configuration, base URL,
alias table) is worked out once in :meth:`ImportChecker.for_file`.

Example:
    >>> checker = ImportChecker.for_file(
    ...     '/my/app/src/api/client.ts',
    ...     settings={'absolute-imports': {'projectRoot': '.'}},
    ...     options={'onlyPathAliases': False},
    ... )
    >>> proposal = checker.check('../utils/helpers')
    >>> print(proposal.expected_path)
    'utils/helpers'
    >>> proposal.replacement_literal('"../utils/helpers"')
    '"utils/helpers"'
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from .normalizer import get_expected_path
from .project_roots import RootCache, resolve_roots
from .settings import ProjectSettings, RuleOptions
from .tsconfig import (
    MalformedConfig,
    ProjectConfig,
    get_base_url,
    get_paths,
    import_prefix_to_alias,
    locate_config,
)

logger = logging.getLogger(__name__)

QUOTE_CHARACTERS = ("'", '"', "`")


class RuleKind(Enum):
    """The rules a host can register, with the imports each one checks."""

    NO_RELATIVE_IMPORTS = "no-relative-imports"
    NO_RELATIVE_PARENT_IMPORTS = "no-relative-parent-imports"

    @property
    def import_prefix(self) -> str:
        if self is RuleKind.NO_RELATIVE_PARENT_IMPORTS:
            return ".."
        return "."

    @property
    def message_template(self) -> str:
        if self is RuleKind.NO_RELATIVE_PARENT_IMPORTS:
            return (
                "Relative imports from parent directories are not allowed. "
                "Use `{expected}` instead of `{actual}`."
            )
        return "Relative imports are not allowed. Use `{expected}` instead of `{actual}`."

    def applies_to(self, import_path: str) -> bool:
        return import_path.startswith(self.import_prefix)


@dataclass(frozen=True)
class Proposal:
    """A suggested replacement for an import.

    Attributes:
        expected_path: The import string the file should use.
        actual_path: The import string as written.
    """

    expected_path: str
    actual_path: str

    def message(self, kind: RuleKind = RuleKind.NO_RELATIVE_IMPORTS) -> str:
        return kind.message_template.format(expected=self.expected_path, actual=self.actual_path)

    def replacement_literal(self, original_literal: str = "") -> str:
        """Quote ``expected_path`` the same way the original literal was quoted.

        Args:
            original_literal: Source text of the literal, quotes included.

        Returns:
            Replacement text for the whole literal.
        """
        quote = original_literal[:1] if original_literal[:1] in QUOTE_CHARACTERS else "'"
        return f"{quote}{self.expected_path}{quote}"


@dataclass
class ImportChecker:
    """Checks the imports of a single source file.

    Attributes:
        filename: Absolute path of the file being linted.
        kind: Which imports to check.
        options: Mode flags.
        base_url: Absolute base URL, or None when the rule does not apply.
        aliases: Source pattern -> alias pattern table.
        malformed: The configuration error to report, if any.
    """

    filename: str
    kind: RuleKind = RuleKind.NO_RELATIVE_IMPORTS
    options: RuleOptions = field(default_factory=RuleOptions)
    base_url: Optional[str] = None
    aliases: Dict[str, str] = field(default_factory=dict)
    malformed: Optional[MalformedConfig] = None

    @property
    def active(self) -> bool:
        return self.base_url is not None

    @classmethod
    def for_file(
        cls,
        filename: str,
        settings: Union[ProjectSettings, Mapping[str, Any], None] = None,
        options: Union[RuleOptions, Mapping[str, Any], None] = None,
        kind: RuleKind = RuleKind.NO_RELATIVE_IMPORTS,
        cache: Optional[RootCache] = None,
    ) -> "ImportChecker":
        """Resolve everything the checks of ``filename`` depend on.

        Args:
            filename: Path of the file being linted.
            settings: Host shared settings (``{"absolute-imports": {...}}``) or
                a ProjectSettings.
            options: Host rule options (``{"onlyPathAliases": ...}``) or a
                RuleOptions.
            kind: Which imports to check.
            cache: Project-root cache (defaults to the shared one).

        Returns:
            An ImportChecker; inactive when no usable configuration applies.
        """
        filename = os.path.abspath(filename)
        if not isinstance(settings, ProjectSettings):
            settings = ProjectSettings.from_mapping(settings)
        if not isinstance(options, RuleOptions):
            options = RuleOptions.from_mapping(options)
        checker = cls(filename=filename, kind=kind, options=options)

        roots = resolve_roots(
            settings.project_root,
            os.path.dirname(filename),
            configured=settings.configured,
            cache=cache,
        )
        if not roots:
            return checker

        found = locate_config(roots, filename)
        if isinstance(found, MalformedConfig):
            checker.malformed = found
            return checker
        if not isinstance(found, ProjectConfig):
            logger.debug(f"No tsconfig.json or jsconfig.json applies to {filename}")
            return checker

        checker.base_url = get_base_url(found)
        if checker.base_url is None:
            logger.debug(f"{found.path} declares no compilerOptions.baseUrl")
            return checker

        checker.aliases = import_prefix_to_alias(get_paths(found))
        return checker

    def expected_path(self, import_path: str) -> Optional[str]:
        """Canonical form of ``import_path``, or None if there is none."""
        if self.base_url is None:
            return None
        target = os.path.normpath(os.path.join(os.path.dirname(self.filename), import_path))
        return get_expected_path(
            target,
            self.base_url,
            self.aliases,
            only_path_aliases=self.options.only_path_aliases,
            only_absolute_imports=self.options.only_absolute_imports,
        )

    def check(self, import_path: str) -> Optional[Proposal]:
        """Propose a replacement for one import, or None if it is fine."""
        if not self.active or not self.kind.applies_to(import_path):
            return None

        expected = self.expected_path(import_path)
        if not expected or expected == import_path:
            return None
        return Proposal(expected_path=expected, actual_path=import_path)
