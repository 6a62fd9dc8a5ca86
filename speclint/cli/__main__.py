#!/usr/bin/env python3
"""Entry point for the speclint CLI when run as python -m speclint.cli."""

if __name__ == "__main__":
    from speclint.cli.main import main

    main()
