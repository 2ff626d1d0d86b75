"""CLI entrypoint for the themed crossword generator."""

from __future__ import annotations

import sys

from crswrd.cli import main


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
