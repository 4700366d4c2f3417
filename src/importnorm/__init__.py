"""importnorm - normalize relative imports to path aliases or base-URL paths.

Given a source file and a relative import it contains, importnorm finds the
tsconfig.json / jsconfig.json that applies to the file and works out the
import string the project prefers: an alias from ``compilerOptions.paths``
or a path relative to ``compilerOptions.baseUrl``.

Components:
    - expand_glob: Expands project-root globs against the filesystem
    - resolve_roots: Turns a project-root setting into candidate roots
    - locate_config: Picks the most specific configuration for a file
    - get_expected_path: Computes the canonical import string
    - ImportChecker: Per-file entry point for a lint host

Example:
    >>> from importnorm import ImportChecker
    >>> checker = ImportChecker.for_file('/my/app/src/api/client.ts')
    >>> if checker.malformed:
    ...     print(checker.malformed.describe())
    >>> proposal = checker.check('../utils/helpers')
    >>> if proposal:
    ...     print(proposal.message())
    Relative imports are not allowed. Use `utils/helpers` instead of `../utils/helpers`.
"""

from .glob_walker import expand_glob
from .jsonc import ParseError, ParseErrorCode, parse_jsonc
from .normalizer import get_expected_path
from .project_roots import (
    RootCache,
    clear_root_cache,
    fallback_project_root,
    project_root_options,
    resolve_roots,
)
from .rules import ImportChecker, Proposal, RuleKind
from .settings import ProjectSettings, RuleOptions, SettingsError, load_settings_from_pyproject
from .tsconfig import (
    ConfigNotFound,
    MalformedConfig,
    ProjectConfig,
    common_path_segment_count,
    get_base_url,
    get_paths,
    import_prefix_to_alias,
    locate_config,
)

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Glob Walker
    "expand_glob",
    # Project roots
    "RootCache",
    "clear_root_cache",
    "fallback_project_root",
    "project_root_options",
    "resolve_roots",
    # Configuration lookup
    "ConfigNotFound",
    "MalformedConfig",
    "ProjectConfig",
    "ParseError",
    "ParseErrorCode",
    "parse_jsonc",
    "common_path_segment_count",
    "get_base_url",
    "get_paths",
    "import_prefix_to_alias",
    "locate_config",
    # Normalization
    "get_expected_path",
    # Lint host entry point
    "ImportChecker",
    "Proposal",
    "RuleKind",
    # Settings
    "ProjectSettings",
    "RuleOptions",
    "SettingsError",
    "load_settings_from_pyproject",
]
