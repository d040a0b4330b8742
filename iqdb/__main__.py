"""Entry point for running iqdb as a module: python -m iqdb"""

from iqdb.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
