"""Allow ``python -m confloader``."""
from __future__ import annotations

import sys

from confloader.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
