"""Allow ``python -m pymodfind``."""

import sys

from pymodfind.main import main

if __name__ == "__main__":
    sys.exit(main())
