"""speclint command line interface."""

from speclint.cli.main import app, main

__all__ = ["app", "main"]
