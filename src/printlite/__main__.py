# src/printlite/__main__.py
"""Module entry point: ``python -m printlite``."""

from printlite.app import main

if __name__ == "__main__":
    raise SystemExit(main())
