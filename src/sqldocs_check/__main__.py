"""Module entry point for running with python -m sqldocs_check."""

from sqldocs_check.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
