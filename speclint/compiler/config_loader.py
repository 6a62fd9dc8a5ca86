"""Configuration loader for speclint.

Parses configuration into kernel config models. Supported sources:

1. An explicit TOML path, or the ``SPECLINT_CONFIG_PATH`` env var.
2. ``speclint.toml`` in the start directory.
3. ``pyproject.toml [tool.speclint]`` in the start directory or a parent.

The loader is only consulted by the CLI; a lint session receives the parsed
config explicitly.
"""

from __future__ import annotations

import os
import re
import tomllib
from pathlib import Path
from typing import Any, Literal, cast

from speclint.core.logging import get_logger
from speclint.kernel.config.models import LoggingConfig, SpecLintConfig
from speclint.kernel.exceptions import ConfigurationError

_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = _TRUTHY_VALUES | _FALSY_VALUES
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


class ConfigLoader:
    """Loads and processes speclint configuration files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_config_file(
        self, path: str | Path | None = None, start_dir: Path | None = None
    ) -> SpecLintConfig:
        """Load configuration from a TOML file.

        Parameters
        ----------
        path : str | Path | None
            Path to config file. If None, searches using discovery order.
        start_dir : Path | None
            Directory the discovery starts from (defaults to the cwd)

        Returns
        -------
        SpecLintConfig
            Parsed configuration with environment variables substituted

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        ConfigurationError
            If the file is not valid TOML or holds invalid values
        """
        config_path = self._find_config_file(path, start_dir or Path.cwd())
        logger.info("Loading configuration from {path}", path=config_path)

        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(str(config_path), f"invalid TOML: {e}") from e

        if "tool" in data and "speclint" in data.get("tool", {}):
            section = data["tool"]["speclint"]
        elif config_path.name == "pyproject.toml":
            logger.warning("No [tool.speclint] section found in pyproject.toml, using defaults")
            section = {}
        else:
            section = data

        section = self._substitute_env_vars(section)
        return self._parse_config(section)

    def _find_config_file(self, path: str | Path | None, start_dir: Path) -> Path:
        """Find configuration file.

        Discovery order:
        1. Explicit path argument
        2. ``SPECLINT_CONFIG_PATH`` env var
        3. ``speclint.toml`` in the start directory
        4. ``pyproject.toml`` with ``[tool.speclint]`` in the start directory or a parent

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("SPECLINT_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug("Using config from SPECLINT_CONFIG_PATH: {}", config_path)
                return config_path
            logger.warning("SPECLINT_CONFIG_PATH set but file not found: {}", config_path)

        if (start_dir / "speclint.toml").exists():
            return start_dir / "speclint.toml"

        current = start_dir.resolve()
        while True:
            pyproject = current / "pyproject.toml"
            if pyproject.exists():
                with pyproject.open("rb") as f:
                    try:
                        data = tomllib.load(f)
                    except tomllib.TOMLDecodeError:
                        data = {}
                if "speclint" in data.get("tool", {}):
                    return pyproject
            if current == current.parent:
                break
            current = current.parent

        raise FileNotFoundError(
            "No configuration file found. Provide a TOML path, set SPECLINT_CONFIG_PATH, "
            "or add [tool.speclint] to pyproject.toml"
        )

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute ``${VAR}`` environment variables in configuration."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    logger.debug(
                        "Environment variable ${{{var_name}}} not found, keeping placeholder",
                        var_name=var_name,
                    )
                    return match.group(0)
                return value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any]) -> SpecLintConfig:
        """Parse raw configuration data into SpecLintConfig.

        Environment variables take precedence over file values:
        - SPECLINT_REPOS_DIR: Directory holding named spec repositories
        - SPECLINT_MAX_WORKERS: Concurrent spec analyses
        """
        repos_dir = data.get("repos_dir")
        max_workers = data.get("max_workers", 4)

        if env_repos := os.getenv("SPECLINT_REPOS_DIR"):
            repos_dir = env_repos
            logger.debug("Overriding repos_dir from env: {}", repos_dir)

        if env_workers := os.getenv("SPECLINT_MAX_WORKERS"):
            try:
                max_workers = int(env_workers)
            except ValueError:
                logger.warning("Invalid SPECLINT_MAX_WORKERS value: {}", env_workers)

        build = data.get("build", {})
        if not isinstance(build, dict):
            raise ConfigurationError("build", "must be a table of platform = command")

        try:
            return SpecLintConfig(
                repos_dir=str(Path(repos_dir).expanduser()) if repos_dir else None,
                max_workers=int(max_workers),
                fetch_timeout=float(data.get("fetch_timeout", 300.0)),
                build_timeout=float(data.get("build_timeout", 600.0)),
                git_executable=str(data.get("git_executable", "git")),
                build_commands={str(k): str(v) for k, v in build.items()},
                logging=self._parse_logging_config(data.get("logging", {})),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError("speclint", str(e)) from e

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse logging configuration with environment variable overrides.

        Environment variables take precedence over config file values:
        - SPECLINT_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - SPECLINT_LOG_FORMAT: Output format (console, json, structured, rich)
        - SPECLINT_LOG_FILE: Optional file path for log output
        - SPECLINT_LOG_COLOR: Use color output (true/false)
        """
        level = logging_data.get("level", "WARNING")
        format_type = logging_data.get("format", "structured")
        output_file = logging_data.get("output_file")
        use_color = logging_data.get("use_color", True)
        include_timestamp = logging_data.get("include_timestamp", True)

        if env_level := os.getenv("SPECLINT_LOG_LEVEL"):
            level = env_level.upper()

        if env_format := os.getenv("SPECLINT_LOG_FORMAT"):
            format_type = env_format.lower()

        if env_file := os.getenv("SPECLINT_LOG_FILE"):
            output_file = env_file

        if env_color := os.getenv("SPECLINT_LOG_COLOR"):
            try:
                use_color = _parse_bool_env(env_color)
            except ValueError as e:
                logger.warning("Invalid SPECLINT_LOG_COLOR value: {}", e)

        return LoggingConfig(
            level=cast("Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']", level.upper()),
            format=cast("Literal['console', 'json', 'structured', 'rich']", format_type),
            output_file=output_file,
            use_color=use_color,
            include_timestamp=include_timestamp,
        )


def load_config(path: str | Path | None = None, start_dir: Path | None = None) -> SpecLintConfig:
    """Load configuration from file or return defaults.

    Parameters
    ----------
    path : str | Path | None
        Path to configuration file or None to search
    start_dir : Path | None
        Directory the discovery starts from

    Returns
    -------
    SpecLintConfig
        Loaded configuration or defaults if no file found
    """
    loader = ConfigLoader()
    try:
        return loader.load_config_file(path, start_dir)
    except FileNotFoundError as e:
        if path:
            raise ConfigurationError("config", str(e)) from e
        logger.info("No configuration file found, using defaults")
        return loader._parse_config({})
