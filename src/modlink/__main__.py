"""Allow ``python -m modlink``."""

import sys

from modlink.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
