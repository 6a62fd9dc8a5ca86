"""speclint - rule-based linter for package specification files.

Validates ``.pkgspec`` files (name, version, license, source and per-platform
file layout) before they are published to a shared package index.
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("speclint")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from speclint.kernel.exceptions import (
    ConfigurationError,
    InformativeError,
    LintFailedError,
    SpecLintError,
)
from speclint.kernel.linting import LintOptions, LintSession, SessionResult

__all__ = [
    "ConfigurationError",
    "InformativeError",
    "LintFailedError",
    "LintOptions",
    "LintSession",
    "SessionResult",
    "SpecLintError",
    "__version__",
]
