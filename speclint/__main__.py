"""Entry point for running speclint as a module (python -m speclint)."""

from __future__ import annotations


def main() -> None:
    """Main entry point for module execution."""
    from speclint.cli.main import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
