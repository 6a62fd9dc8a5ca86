"""Configuration data models for speclint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from speclint.kernel.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for speclint.

    Attributes
    ----------
    level : str, default="WARNING"
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write JSON logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.speclint.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export SPECLINT_LOG_LEVEL=DEBUG
    export SPECLINT_LOG_FORMAT=rich
    ```
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


@dataclass(frozen=True, slots=True)
class SpecLintConfig:
    """Complete speclint configuration.

    Attributes
    ----------
    repos_dir : str | None
        Directory holding named spec repositories (``<repos_dir>/<name>``)
    max_workers : int
        Maximum number of specs analysed concurrently
    fetch_timeout : float
        Seconds allowed for fetching the declared source of one spec
    build_timeout : float
        Seconds allowed for one platform build
    git_executable : str
        Git binary used by the source fetcher
    build_commands : dict[str, str]
        Platform id -> shell command template run during deep linting
    logging : LoggingConfig
        Logging configuration

    Examples
    --------
    TOML configuration in pyproject.toml:

    ```toml
    [tool.speclint]
    repos_dir = "~/.speclint/repos"
    max_workers = 4

    [tool.speclint.build]
    ios = "xcodebuild -project {workspace}/Sample.xcodeproj -sdk iphonesimulator"
    osx = "clang -fsyntax-only {files}"
    ```
    """

    repos_dir: str | None = None
    max_workers: int = 4
    fetch_timeout: float = 300.0
    build_timeout: float = 600.0
    git_executable: str = "git"
    build_commands: dict[str, str] = field(default_factory=dict)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        """Validate numeric limits.

        Raises
        ------
        ConfigurationError
            If a worker count or timeout is not positive
        """
        if self.max_workers < 1:
            raise ConfigurationError("max_workers", f"must be at least 1 (got {self.max_workers})")
        if self.fetch_timeout <= 0:
            raise ConfigurationError("fetch_timeout", "must be positive")
        if self.build_timeout <= 0:
            raise ConfigurationError("build_timeout", "must be positive")
