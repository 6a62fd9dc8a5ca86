"""Core exception hierarchy for speclint.

All speclint exceptions inherit from SpecLintError for easy exception handling.
Only ConfigurationError is allowed to escape a lint session; every other
failure is captured as a finding.
"""

from __future__ import annotations

from pathlib import Path

# ============================================================================
# Base Exception
# ============================================================================


class SpecLintError(Exception):
    """Base exception for all speclint errors.

    Catch this to handle all speclint errors.
    """

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(SpecLintError):
    """Raised when configuration or lint input is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("lint", "no spec found in the current directory")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the component with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


# ============================================================================
# Spec Errors
# ============================================================================


class SpecParseError(SpecLintError):
    """Raised when a spec file cannot be read or parsed.

    Examples
    --------
    Example usage::

        raise SpecParseError(Path("Bananas.pkgspec"), "expected a mapping")
    """

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize parse error.

        Args
        ----
            path: Path of the spec file that failed to load
            reason: Explanation of what's wrong
        """
        super().__init__(f"Unable to load spec '{path.name}': {reason}")
        self.path = path
        self.reason = reason


# ============================================================================
# Deep Verification Errors
# ============================================================================


class FetchError(SpecLintError):
    """Raised when the declared source of a spec cannot be fetched."""

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Unable to fetch source '{location}': {reason}")


class BuildError(SpecLintError):
    """Raised when the build toolchain cannot be run for a platform."""

    def __init__(self, platform: str, reason: str) -> None:
        self.platform = platform
        self.reason = reason
        super().__init__(f"Unable to build for '{platform}': {reason}")


# ============================================================================
# User-facing Failures
# ============================================================================


class InformativeError(SpecLintError):
    """A user-facing failure that is expected and carries a readable message.

    Distinguished from unexpected crashes: the CLI prints the message and
    exits non-zero without a traceback.
    """

    pass


class LintFailedError(InformativeError):
    """Raised on request when a lint session produced at least one error."""

    def __init__(self, report: str) -> None:
        self.report = report
        super().__init__(report)
