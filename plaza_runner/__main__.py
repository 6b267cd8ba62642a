"""Entry point for ``python -m plaza_runner``."""
import sys

from plaza_runner.commands.run_transactions import main

if __name__ == "__main__":
    sys.exit(main())
