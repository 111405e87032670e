"""Entry point for ``python -m launchts``."""

import sys

from launchts.cli import main

if __name__ == "__main__":
    sys.exit(main())
