"""Entry point for ``python -m shadowstag``."""

import sys

from .cli import main

sys.exit(main())
