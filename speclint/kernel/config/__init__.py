"""Configuration models for speclint."""

from speclint.kernel.config.models import LoggingConfig, SpecLintConfig

__all__ = [
    "LoggingConfig",
    "SpecLintConfig",
]
