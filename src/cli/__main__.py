"""Allow ``python -m src.cli`` execution (runs the store command)."""

import sys

from src.cli.store import main

sys.exit(main())
